from treapviz.validators import validate_node_value, validate_priority
import pytest


@pytest.mark.parametrize(
    "text,expected", [("42", 42), (" 7 ", 7), ("-1000", -1000), ("1000", 1000), (5, 5)]
)
def test_validate_node_value_accepts(text, expected):
    result = validate_node_value(text)
    assert result.success is True
    assert result.value == expected
    assert result.error is None


@pytest.mark.parametrize("text", ["abc", "", "12.5", "1001", "-1001"])
def test_validate_node_value_rejects(text):
    result = validate_node_value(text)
    assert result.success is False
    assert result.value is None
    assert result.error.startswith("Value:")


def test_validate_priority():
    assert validate_priority("0").value == 0
    assert validate_priority("100").value == 100
    assert validate_priority("101").success is False
    assert validate_priority("-1").success is False
    assert validate_priority("high").error.startswith("Priority:")
