from argcase_platform.core.errors import CaseConfigLoadError
from argcase_platform.core.io.load_config import load_config
from argcase_platform.core.validate.validate_config import validate_config


def test_load_yaml_success():
    config = load_config("examples/create-user.yaml")
    assert config["schema_version"] == "0.1.0"
    assert config["function"] == "create_user"
    assert isinstance(config["args"], list)
    assert config["__file__"].endswith("create-user.yaml")


def test_load_json_success():
    config = load_config("examples/scenario-optional.json")
    assert config["args"][1]["optional"] is True


def test_load_missing_file():
    try:
        load_config("examples/does-not-exist.yaml")
        assert False, "expected CaseConfigLoadError"
    except CaseConfigLoadError as e:
        assert e.code == "E_FILE_NOT_FOUND"


def test_load_unsupported_format(tmp_path):
    p = tmp_path / "args.txt"
    p.write_text("hello", encoding="utf-8")
    try:
        load_config(str(p))
        assert False, "expected CaseConfigLoadError"
    except CaseConfigLoadError as e:
        assert e.code == "E_UNSUPPORTED_FORMAT"


def test_load_bad_json(tmp_path):
    p = tmp_path / "args.json"
    p.write_text("{not json", encoding="utf-8")
    try:
        load_config(str(p))
        assert False, "expected CaseConfigLoadError"
    except CaseConfigLoadError as e:
        assert e.code == "E_JSON_PARSE"


def test_load_top_level_list(tmp_path):
    p = tmp_path / "args.yaml"
    p.write_text("- name: a\n", encoding="utf-8")
    try:
        load_config(str(p))
        assert False, "expected CaseConfigLoadError"
    except CaseConfigLoadError as e:
        assert e.code == "E_INVALID_TOP_LEVEL"
        assert str(e).endswith("E_INVALID_TOP_LEVEL: arg config must be a mapping with schema_version and args")


def test_load_bad_yaml(tmp_path):
    p = tmp_path / "args.yml"
    p.write_text("args: [unclosed\n", encoding="utf-8")
    try:
        load_config(str(p))
        assert False, "expected CaseConfigLoadError"
    except CaseConfigLoadError as e:
        assert e.code == "E_YAML_PARSE"


def test_load_rejects_unknown_top_level_key():
    try:
        load_config("examples/unknown-key.yaml")
        assert False, "expected CaseConfigLoadError"
    except CaseConfigLoadError as e:
        assert e.code == "E_UNKNOWN_KEY"
        assert e.path == "argz"
        assert "allowed: schema_version, function, args" in e.message


def test_load_args_mapping_becomes_list_in_key_order():
    config = load_config("examples/args-mapping.yaml")
    assert config["args"] == [
        {"name": "flag", "valid_cases": [True], "invalid_cases": [False, 0]},
        {"name": "count", "valid_cases": [1, 2], "invalid_cases": [3]},
    ]


def test_load_args_mapping_matches_list_form():
    mapped, errors1 = validate_config(load_config("examples/args-mapping.yaml"))
    listed, errors2 = validate_config(load_config("examples/scenario-pinning.yaml"))
    assert errors1 == errors2 == []
    assert mapped is not None and listed is not None
    assert mapped.args == listed.args


def test_load_missing_args_is_left_to_validator(tmp_path):
    p = tmp_path / "args.json"
    p.write_text('{"schema_version": "0.1.0"}', encoding="utf-8")
    config = load_config(str(p))
    assert config["args"] is None
    assert "function" not in config
