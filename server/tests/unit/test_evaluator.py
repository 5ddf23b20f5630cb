import pytest

from lispy.core.exceptions import MalformedTreeError
from lispy.models.tree import Application, NumberLeaf
from lispy.models.value import Error, ErrorKind, Number, make_error, make_number, render
from lispy.services.evaluator import apply_op, evaluate
from lispy.services.reader import parse


def run(text: str) -> str:
    return render(evaluate(parse(text)))


@pytest.mark.parametrize(
    ("op", "x", "y", "expected"),
    [
        ("+", 2, 3, 5),
        ("-", 2, 3, -1),
        ("*", -4, 3, -12),
        ("/", 7, 2, 3),
        ("/", -7, 2, -3),
        ("/", 7, -2, -3),
        ("/", -7, -2, 3),
    ],
)
def test_apply_op_on_numbers(op: str, x: int, y: int, expected: int) -> None:
    assert apply_op(make_number(x), op, make_number(y)) == Number(expected)


def test_apply_op_division_by_zero() -> None:
    assert apply_op(make_number(5), "/", make_number(0)) == Error(ErrorKind.DIVISION_BY_ZERO)


def test_apply_op_unknown_operator() -> None:
    assert apply_op(make_number(3), "%", make_number(4)) == Error(ErrorKind.INVALID_OPERATOR)


def test_apply_op_left_error_wins() -> None:
    left = make_error(ErrorKind.INVALID_NUMBER)
    right = make_error(ErrorKind.DIVISION_BY_ZERO)

    assert apply_op(left, "+", right) is left


def test_apply_op_right_error_beats_unknown_operator() -> None:
    right = make_error(ErrorKind.DIVISION_BY_ZERO)

    assert apply_op(make_number(1), "%", right) is right


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("+ 1 2", "3"),
        ("- 10 4", "6"),
        ("* 6 7", "42"),
        ("/ 9 3", "3"),
        ("/ -9 2", "-4"),
        ("+ 1 2 3 4", "10"),
        ("- 10 1 2 3", "4"),
        ("/ 100 5 2", "10"),
        ("+ 5", "5"),
        ("- 5", "5"),
        ("* 10 (+ 1 1 1) (- 4 2)", "60"),
        ("(+ 1 (* 2 3))", "7"),
        ("+ -9223372036854775808 0", "-9223372036854775808"),
    ],
)
def test_evaluate_expressions(expression: str, expected: str) -> None:
    assert run(expression) == expected


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("/ 10 0", "Error: Division by Zero!"),
        ("/ 10 (- 3 3)", "Error: Division by Zero!"),
        ("% 3 4", "Error: Invalid Operator!"),
        ("% 3 abc", "Error: Invalid Number!"),
        ("+ 99999999999999999999 1", "Error: Invalid Number!"),
        ("+ 9223372036854775808 0", "Error: Invalid Number!"),
        ("+ 1 2x", "Error: Invalid Number!"),
        ("+ (% 1 2) (/ 3 0)", "Error: Invalid Operator!"),
        ("+ (/ 3 0) (% 1 2)", "Error: Division by Zero!"),
        ("* (/ 1 0) 2 3", "Error: Division by Zero!"),
    ],
)
def test_evaluate_errors(expression: str, expected: str) -> None:
    assert run(expression) == expected


def test_evaluate_leaf() -> None:
    assert evaluate(NumberLeaf("99999999999999999999")) == Error(ErrorKind.INVALID_NUMBER)
    assert evaluate(NumberLeaf("-12")) == Number(-12)


def test_single_operand_skips_operator_check() -> None:
    assert run("% 3") == "3"


def test_evaluate_does_not_mutate_tree() -> None:
    tree = parse("+ 1 (* 2 3)")
    snapshot = repr(tree)

    evaluate(tree)

    assert repr(tree) == snapshot


def test_application_without_operands_is_rejected() -> None:
    with pytest.raises(MalformedTreeError):
        evaluate(Application(operator="+", operands=()))


def test_unknown_node_type_is_rejected() -> None:
    with pytest.raises(MalformedTreeError):
        evaluate("+ 1 2")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("literal", "expected"),
    [
        ("9223372036854775807", Number(9223372036854775807)),
        ("-9223372036854775808", Number(-9223372036854775808)),
        ("-9223372036854775809", Error(ErrorKind.INVALID_NUMBER)),
        ("00000000000000000001", Number(1)),
        ("-" + "0" * 5000, Number(0)),
        ("1" * 5000, Error(ErrorKind.INVALID_NUMBER)),
    ],
)
def test_evaluate_leaf_range(literal: str, expected) -> None:
    assert evaluate(NumberLeaf(literal)) == expected
