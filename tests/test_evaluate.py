"""Tests for static marker function evaluation."""

import pytest
from trees import args, assign, cell, fn, ident, marker

from octdepends.analyzers.errors import MarkerEvaluationError
from octdepends.analyzers.evaluate import evaluate_marker
from octdepends.models.ast import (
    BinaryExpression,
    Constant,
    IndexExpression,
    Matrix,
    ReturnCommand,
    SimpleAssignment,
    Statement,
    StatementList,
    UserFunction,
)

MARKER = "__depends_extra_files__"


class TestEvaluateMarker:
    """Tests for the supported statement forms."""

    def test_varargout_cell(self) -> None:
        assert evaluate_marker(marker("a.dat", "", "b.dat")) == ["a.dat", "", "b.dat"]

    def test_no_outputs(self) -> None:
        assert evaluate_marker(fn(MARKER)) == []

    def test_named_outputs_in_order(self) -> None:
        function = fn(
            MARKER,
            assign("b", Constant("second.txt")),
            assign("a", Constant("first.txt")),
            outputs=("a", "b"),
        )

        assert evaluate_marker(function) == ["first.txt", "second.txt"]

    def test_unassigned_output_omitted(self) -> None:
        function = fn(MARKER, assign("a", Constant("x.txt")), outputs=("a", "b"))

        assert evaluate_marker(function) == ["x.txt"]

    def test_string_concatenation(self) -> None:
        function = fn(
            MARKER,
            assign("base", Constant("tables/")),
            assign("a", Matrix((args(ident("base"), Constant("x.txt")),))),
            outputs=("a",),
        )

        assert evaluate_marker(function) == ["tables/x.txt"]

    def test_cell_concatenation(self) -> None:
        function = fn(
            MARKER,
            assign("first", cell("a.txt")),
            assign("varargout", Matrix((args(ident("first"), cell("b.txt")),))),
            outputs=("varargout",),
        )

        assert evaluate_marker(function) == ["a.txt", "b.txt"]

    def test_varargout_element_stores(self) -> None:
        def store(k: int, value: str) -> SimpleAssignment:
            target = IndexExpression(ident("varargout"), (args(Constant(k)),), "{")
            return SimpleAssignment(target, Constant(value))

        function = fn(MARKER, store(2, "two.txt"), store(1, "one.txt"), outputs=("varargout",))

        assert evaluate_marker(function) == ["one.txt", "two.txt"]

    def test_return_stops_evaluation(self) -> None:
        function = UserFunction(
            MARKER,
            return_list=fn(MARKER, outputs=("a",)).return_list,
            body=StatementList(
                (
                    Statement(expression=assign("a", Constant("kept.txt"))),
                    Statement(command=ReturnCommand()),
                    Statement(expression=assign("a", Constant("dropped.txt"))),
                )
            ),
        )

        assert evaluate_marker(function) == ["kept.txt"]

    def test_copy_does_not_alias(self) -> None:
        """Element stores into varargout must not change an earlier cell."""
        store = SimpleAssignment(
            IndexExpression(ident("varargout"), (args(Constant(1)),), "{"),
            Constant("changed.txt"),
        )
        function = fn(
            MARKER,
            assign("files", cell("orig.txt")),
            assign("varargout", ident("files")),
            store,
            assign("varargout", Matrix((args(ident("varargout"), ident("files")),))),
            outputs=("varargout",),
        )

        assert evaluate_marker(function) == ["changed.txt", "orig.txt"]


class TestEvaluateMarkerErrors:
    """Tests for constructs that cannot be folded statically."""

    def test_function_call_rejected(self) -> None:
        function = fn(
            MARKER,
            assign("a", IndexExpression(ident("fullfile"), (args(Constant("x")),), "(")),
            outputs=("a",),
        )

        with pytest.raises(MarkerEvaluationError, match="index_expression"):
            evaluate_marker(function)

    def test_undefined_variable_rejected(self) -> None:
        function = fn(MARKER, assign("a", ident("missing")), outputs=("a",))

        with pytest.raises(MarkerEvaluationError, match="undefined"):
            evaluate_marker(function)

    def test_non_string_output_rejected(self) -> None:
        function = fn(MARKER, assign("a", Constant(3)), outputs=("a",))

        with pytest.raises(MarkerEvaluationError, match="not a string"):
            evaluate_marker(function)

    def test_varargout_must_be_cell(self) -> None:
        function = fn(MARKER, assign("varargout", Constant("x.txt")), outputs=("varargout",))

        with pytest.raises(MarkerEvaluationError, match="cell array"):
            evaluate_marker(function)

    def test_bad_cell_index(self) -> None:
        store = SimpleAssignment(
            IndexExpression(ident("varargout"), (args(Constant(0)),), "{"),
            Constant("x.txt"),
        )

        with pytest.raises(MarkerEvaluationError, match="bad cell index"):
            evaluate_marker(fn(MARKER, store, outputs=("varargout",)))

    def test_mixed_concatenation_rejected(self) -> None:
        function = fn(
            MARKER,
            assign("a", Matrix((args(Constant("x"), cell("y")),))),
            outputs=("a",),
        )

        with pytest.raises(MarkerEvaluationError, match="mixed"):
            evaluate_marker(function)

    def test_other_expressions_rejected(self) -> None:
        function = fn(
            MARKER,
            BinaryExpression("+", Constant(1), Constant(2)),
            outputs=("a",),
        )

        with pytest.raises(MarkerEvaluationError, match="binary_expression"):
            evaluate_marker(function)
