import pytest

from argcase_platform.core.enumerate.enumerate_cases import enumerate_cases
from argcase_platform.core.enumerate.strategies import ListCaseStrategy
from argcase_platform.core.model import ArgConfig


def _configs(optional_second: bool = False) -> list[ArgConfig]:
    return [
        ArgConfig(name="a", valid_cases=(True,), invalid_cases=(False, 0)),
        ArgConfig(name="b", valid_cases=(1, 2), invalid_cases=(3,), optional=optional_second),
    ]


def test_all_valid_single_values():
    configs = [
        ArgConfig(name="a", valid_cases=(True,), invalid_cases=(False,)),
        ArgConfig(name="b", valid_cases=(1,), invalid_cases=(2,)),
    ]
    assert enumerate_cases(ListCaseStrategy())(configs) == [[True, 1]]


def test_all_valid_optional_arg_branches():
    configs = [
        ArgConfig(name="a", valid_cases=(True,), invalid_cases=(False,)),
        ArgConfig(name="b", valid_cases=(1,), invalid_cases=(2,), optional=True),
    ]
    assert enumerate_cases(ListCaseStrategy())(configs) == [[True], [True, 1]]


def test_all_valid_is_full_cross_product():
    configs = [
        ArgConfig(name="a", valid_cases=("x", "y")),
        ArgConfig(name="b", valid_cases=(1, 2, 3)),
    ]
    got = enumerate_cases(ListCaseStrategy())(configs)
    assert got == [["x", 1], ["y", 1], ["x", 2], ["y", 2], ["x", 3], ["y", 3]]


def test_faulted_pins_other_args_to_first_valid_value():
    got = enumerate_cases(ListCaseStrategy())(_configs(), 0)
    assert got == [[False, 1], [0, 1]]
    assert all(case[1] != 2 for case in got)


def test_faulted_with_optional_pinned_arg():
    got = enumerate_cases(ListCaseStrategy())(_configs(optional_second=True), 0)
    assert got == [[False], [0], [False, 1], [0, 1]]


def test_faulted_last_arg():
    got = enumerate_cases(ListCaseStrategy())(_configs(), 1)
    assert got == [[True, 3]]


def test_faulted_without_invalid_cases_is_empty():
    configs = [
        ArgConfig(name="a", valid_cases=(True,), invalid_cases=()),
        ArgConfig(name="b", valid_cases=(1,), invalid_cases=None),
    ]
    generate = enumerate_cases(ListCaseStrategy())
    assert generate(configs, 0) == []
    assert generate(configs, 1) == []


def test_faulted_index_out_of_range_is_empty():
    assert enumerate_cases(ListCaseStrategy())(_configs(), 2) == []


def test_vacuous_target_never_calls_strategy():
    calls = []

    def extend(cases, value):
        calls.append(value)
        return [c + [value] for c in cases] or [[value]]

    configs = [ArgConfig(name="a", valid_cases=(1,), invalid_cases=None)]
    assert enumerate_cases(extend)(configs, 0) == []
    assert calls == []


def test_negative_faulted_index_behaves_like_absent():
    # Boundary: negative index selects the all-valid plan rather than erroring.
    generate = enumerate_cases(ListCaseStrategy())
    assert generate(_configs(), -1) == generate(_configs())
    assert generate(_configs(), -5) == [[True, 1], [True, 2]]


def test_empty_configs_give_no_cases():
    generate = enumerate_cases(ListCaseStrategy())
    assert generate([]) == []
    assert generate([], 0) == []


def test_required_arg_without_valid_cases_empties_all_valid_plan_when_last():
    configs = [
        ArgConfig(name="a", valid_cases=(1, 2)),
        ArgConfig(name="b", valid_cases=()),
    ]
    assert enumerate_cases(ListCaseStrategy())(configs) == []


def test_enumeration_is_deterministic():
    configs = [
        ArgConfig(name="a", valid_cases=("x", "y"), invalid_cases=("",)),
        ArgConfig(name="b", valid_cases=(1, 2), invalid_cases=(-1, None), optional=True),
        ArgConfig(name="c", valid_cases=({"k": 1},), invalid_cases=([],)),
    ]
    generate = enumerate_cases(ListCaseStrategy())
    for idx in (None, 0, 1, 2):
        assert generate(configs, idx) == generate(configs, idx)


def test_plain_function_strategy_ignores_optional_flag():
    def extend(cases, value):
        if not cases:
            return [[value]]
        return [c + [value] for c in cases]

    got = enumerate_cases(extend)(_configs(optional_second=True))
    assert got == [[True, 1], [True, 2]]


def test_strategy_errors_propagate():
    def extend(cases, value):
        raise RuntimeError(f"cannot extend with {value!r}")

    with pytest.raises(RuntimeError, match="cannot extend"):
        enumerate_cases(extend)(_configs())


def test_pinning_arg_without_valid_cases_raises_index_error():
    configs = [
        ArgConfig(name="a", valid_cases=(), invalid_cases=(1,)),
        ArgConfig(name="b", valid_cases=(True,), invalid_cases=(False,)),
    ]
    with pytest.raises(IndexError):
        enumerate_cases(ListCaseStrategy())(configs, 1)


def test_inputs_are_not_mutated():
    configs = _configs(optional_second=True)
    before = list(configs)
    enumerate_cases(ListCaseStrategy())(configs, 0)
    enumerate_cases(ListCaseStrategy())(configs)
    assert configs == before
