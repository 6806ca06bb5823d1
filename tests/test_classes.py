"""Tests for variantgroup.classes module."""

import pytest

from variantgroup.classes import (
    Classes,
    NonLiteralToken,
    ensure_literal,
    uno,
    class_attr,
)
from variantgroup.expander import EmptyGroup


class TestEnsureLiteral:
    """Tests for the literal-only check."""

    def test_plain_string(self):
        assert ensure_literal("text-(red sm)") == "text-(red sm)"

    @pytest.mark.parametrize("value", [None, 42, ["text-red"], b"text-red"])
    def test_non_string_rejected(self, value):
        with pytest.raises(NonLiteralToken, match="only string literals"):
            ensure_literal(value)

    @pytest.mark.parametrize("value", ["text-{{ color }}", "{% if x %}p-1{% endif %}", "bg-${c}"])
    def test_templated_rejected(self, value):
        with pytest.raises(NonLiteralToken, match="templated"):
            ensure_literal(value)

    def test_is_type_error(self):
        with pytest.raises(TypeError):
            ensure_literal(1.5)


class TestClasses:
    """Tests for the Classes container."""

    def test_keeps_order(self):
        assert Classes(["b", "a", "c"]).to_list() == ["b", "a", "c"]

    def test_dedupes(self):
        c = Classes(["a", "b", "a"])
        assert c.to_list() == ["a", "b"]
        assert len(c) == 2

    def test_splits_multi_class_strings(self):
        assert Classes(["text-blue fw800", "m-1"]).to_list() == ["text-blue", "fw800", "m-1"]

    def test_push_and_extend(self):
        c = Classes()
        c.push("a")
        c.extend(["b", "a"])
        c.extend("c d")
        assert list(c) == ["a", "b", "c", "d"]

    def test_contains(self):
        c = Classes(["a"])
        assert "a" in c
        assert "b" not in c

    def test_str(self):
        assert str(Classes(["a", "b"])) == "a b"
        assert str(Classes()) == ""

    def test_equality(self):
        assert Classes(["a", "b"]) == Classes(["a b"])
        assert Classes(["a", "b"]) != Classes(["b", "a"])

    def test_repr(self):
        assert repr(Classes(["a", "b"])) == "Classes('a b')"


class TestUno:
    """Tests for uno and class_attr."""

    def test_single(self):
        assert uno("text-red") == Classes(["text-red"])

    def test_group(self):
        assert uno("text-(red sm)") == Classes(["text-red", "text-sm"])

    def test_multiple_tokens(self):
        assert uno("text-(blue lg)", "placeholder:(italic text-(red sm))") == Classes([
            "text-blue",
            "text-lg",
            "placeholder:italic",
            "placeholder:text-red",
            "placeholder:text-sm",
        ])

    def test_multi_class_literal(self):
        assert uno("text-blue fw800").to_list() == ["text-blue", "fw800"]

    def test_class_attr(self):
        assert class_attr("outline-(~ 2)", "m-1") == "outline outline-2 m-1"

    def test_rejects_non_literal(self):
        with pytest.raises(NonLiteralToken):
            uno("text-red", 3)

    def test_expand_errors_propagate(self):
        with pytest.raises(EmptyGroup):
            uno("p-()")
