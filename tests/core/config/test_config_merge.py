# tests/core/config/test_config_merge.py
"""
Testes do deep-merge de configuração.

Política validada:
    - dict → merge recursivo por chave
    - list → sobrescrita total
    - None → sobrescrita direta; None na base é preenchido por qualquer valor
    - int/float intercambiáveis; bool não é número
    - conflito de tipos → ConfigTypeConflictError com o caminho da chave
    - nenhum input é mutado
"""

import pytest

from dagflow.core.config.errors import ConfigTypeConflictError
from dagflow.core.config.merge import deep_merge


def test_merge_simple_override():
    base = {"a": 1, "b": 2}
    override = {"b": 99}

    out = deep_merge(base, override)

    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dict():
    base = {"engine": {"shutdown_on_failure": False, "log_level": "INFO"}}
    override = {"engine": {"log_level": "DEBUG"}}

    out = deep_merge(base, override)

    assert out == {"engine": {"shutdown_on_failure": False, "log_level": "DEBUG"}}


def test_merge_list_override_total():
    base = {"bindings": {"columns": ["a", "b", "c"]}}
    override = {"bindings": {"columns": ["z"]}}

    assert deep_merge(base, override) == {"bindings": {"columns": ["z"]}}


def test_merge_none_switches_value_off():
    assert deep_merge({"engine": {"log_level": "INFO"}}, {"engine": {"log_level": None}}) == {
        "engine": {"log_level": None}
    }
    assert deep_merge({"engine": {"log_level": None}}, {"engine": {"log_level": "DEBUG"}}) == {
        "engine": {"log_level": "DEBUG"}
    }


def test_merge_new_keys_are_added():
    assert deep_merge({"a": 1}, {"b": {"c": 2}}) == {"a": 1, "b": {"c": 2}}


def test_merge_type_conflict_raises():
    """
    Verifica que um dicionário não pode ser sobrescrito por um escalar.

    Invariantes:
        - A exceção utilizada é específica (`ConfigTypeConflictError`)
        - Nenhum merge parcial é produzido em caso de conflito
    """
    base = {"engine": {"shutdown_on_failure": False}}
    override = {"engine": "DEBUG"}

    with pytest.raises(ConfigTypeConflictError):
        deep_merge(base, override)


def test_merge_does_not_share_nested_objects():
    base = {"bindings": {"nested": {"k": 1}}}
    out = deep_merge(base, {})

    out["bindings"]["nested"]["k"] = 2

    assert base["bindings"]["nested"]["k"] == 1


def test_merge_requires_dicts_at_root():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["not", "a", "dict"])  # type: ignore[arg-type]


def test_merge_numbers_are_interchangeable():
    out = deep_merge({"bindings": {"sample.ratio": 1}}, {"bindings": {"sample.ratio": 0.25}})

    assert out == {"bindings": {"sample.ratio": 0.25}}


def test_merge_bool_is_not_a_number():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"bindings": {"sample.rows": 100}}, {"bindings": {"sample.rows": True}})


def test_merge_conflict_message_names_the_dotted_key():
    with pytest.raises(ConfigTypeConflictError, match=r"'engine\.shutdown_on_failure'"):
        deep_merge({"engine": {"shutdown_on_failure": False}}, {"engine": {"shutdown_on_failure": "yes"}})


def test_merge_null_in_base_is_filled_by_any_override():
    base = {"bindings": {"output": None}}

    assert deep_merge(base, {"bindings": {"output": {"path": "out.csv"}}}) == {
        "bindings": {"output": {"path": "out.csv"}}
    }
    assert deep_merge(base, {"bindings": {"output": "out.csv"}}) == {"bindings": {"output": "out.csv"}}
