import pytest

from slightx.ubsan import (
    Reporter,
    SourceLocation,
    TypeDescriptor,
    UndefinedBehaviorAbort,
)

LOC = SourceLocation("main.c", 12, 7)
SIGNED_INT = TypeDescriptor(kind=0, info=(5 << 1) | 1, name="int")
UNSIGNED_INT = TypeDescriptor(kind=0, info=5 << 1, name="unsigned int")


def make(always_abort=False):
    out = []
    return out, Reporter(out.append, always_abort)


def lines(out):
    parts = "".join(out).split("\r\n")
    assert parts[-1] == ""
    return parts[:-1]


def message(out):
    return lines(out)[7]


def test_report_frame():
    out, rep = make()
    rep.pointer_overflow(LOC, 1, 2)
    result = lines(out)
    assert len(result) == 9
    assert result[0] == "======== UNDEFINED BEHAVIOR DETECTED ========"
    assert result[1] == "Description: Pointer overflow"
    assert result[2] == "Location:"
    assert result[3] == "  file: main.c"
    assert result[4] == "  line: 12"
    assert result[5] == "  column: 7"
    assert result[6] == "---------------------------------------------"
    assert result[8] == "============================================="


def test_type_mismatch_null():
    out, rep = make()
    rep.type_mismatch(LOC, SIGNED_INT, 4, 0, 0)
    assert lines(out)[1] == "Description: Null pointer dereference"
    assert message(out) == "load of null pointer of type int"


def test_type_mismatch_unaligned():
    out, rep = make()
    rep.type_mismatch(LOC, SIGNED_INT, 4, 1, 0x1003)
    assert lines(out)[1] == "Description: Unaligned access"
    assert message(out) == (
        "store to unaligned pointer *0x1003 of type int (alignment 4)"
    )


def test_type_mismatch_objsize_when_aligned():
    out, rep = make()
    rep.type_mismatch(LOC, SIGNED_INT, 4, 3, 0x1000)
    assert lines(out)[1] == "Description: Insufficient object size"
    assert message(out).startswith("member access within address *0x1000")


def test_type_mismatch_zero_alignment_is_objsize():
    out, rep = make()
    rep.type_mismatch(LOC, SIGNED_INT, 0, 0, 0x1003)
    assert lines(out)[1] == "Description: Insufficient object size"


def test_type_mismatch_v1_expands_alignment():
    out, rep = make()
    rep.type_mismatch_v1(LOC, SIGNED_INT, 3, 0, 0x1004)
    assert lines(out)[1] == "Description: Unaligned access"
    assert message(out).endswith("(alignment 8)")


def test_abort_flag_raises_after_report():
    out, rep = make()
    with pytest.raises(UndefinedBehaviorAbort) as err:
        rep.type_mismatch(LOC, SIGNED_INT, 4, 0, 0, abort=True)
    assert err.value.description == "Null pointer dereference"
    assert len(lines(out)) == 9


def test_always_abort():
    out, rep = make(always_abort=True)
    with pytest.raises(UndefinedBehaviorAbort):
        rep.vla_bound_not_positive(LOC, -3)
    assert lines(out)[-1] == "============================================="


def test_builtin_unreachable_always_aborts():
    out, rep = make()
    with pytest.raises(UndefinedBehaviorAbort):
        rep.builtin_unreachable(LOC)
    assert message(out) == "Execution reached an unreachable code path"


@pytest.mark.parametrize(
    "kind, expected",
    [
        (0, "Passed 0 to clz()"),
        (1, "Passed 0 to ctz()"),
        (7, "Passed 0 to <unknown> (kind: 7)"),
    ],
)
def test_invalid_builtin(kind, expected):
    out, rep = make()
    rep.invalid_builtin(LOC, kind)
    assert message(out) == expected


def test_signed_add_overflow():
    out, rep = make()
    rep.add_overflow(LOC, SIGNED_INT, -1, 5)
    assert lines(out)[1] == "Description: Signed Integer overflow"
    assert message(out) == "-1 + 5 can't be represented in type int"


def test_unsigned_mul_overflow():
    out, rep = make()
    rep.mul_overflow(LOC, UNSIGNED_INT, 7, 9)
    assert lines(out)[1] == "Description: Unsigned Integer overflow"
    assert message(out) == "7 * 9 can't be represented in type unsigned int"


def test_sub_overflow_operator():
    out, rep = make()
    rep.sub_overflow(LOC, SIGNED_INT, 3, 4)
    assert message(out) == "3 - 4 can't be represented in type int"


def test_negate_overflow_signed():
    out, rep = make()
    rep.negate_overflow(LOC, SIGNED_INT, -2147483648)
    assert message(out) == "--2147483648 can't be represented in type int"


def test_divrem_signed_minus_one():
    out, rep = make()
    rep.divrem_overflow(LOC, SIGNED_INT, -9, -1)
    assert message(out) == "-9 / -1 can't be represented in type int"


@pytest.mark.parametrize("type_", [SIGNED_INT, UNSIGNED_INT])
def test_divrem_by_zero(type_):
    out, rep = make()
    rep.divrem_overflow(LOC, type_, 5, 0)
    assert message(out) == "division by zero"


def test_shift_negative_exponent():
    out, rep = make()
    rep.shift_out_of_bounds(LOC, SIGNED_INT, SIGNED_INT, 1, -2)
    assert message(out) == "shift exponent -2 is negative"


def test_shift_too_large_depends_on_width():
    out, rep = make()
    rep.shift_out_of_bounds(LOC, SIGNED_INT, SIGNED_INT, 1, 32)
    assert message(out) == "shift exponent 32 is too large for type int"

    out2, rep2 = make()
    rep2.shift_out_of_bounds(LOC, UNSIGNED_INT, SIGNED_INT, 1, 31)
    assert "too large" not in message(out2)


def test_shift_negative_lhs():
    out, rep = make()
    rep.shift_out_of_bounds(LOC, SIGNED_INT, SIGNED_INT, -1, 3)
    assert message(out) == "left shift of negative type int"


def test_shift_unrepresentable():
    out, rep = make()
    rep.shift_out_of_bounds(LOC, UNSIGNED_INT, UNSIGNED_INT, 5, 31)
    assert message(out) == (
        "left shift of 5 by 31 places cannot be represented in type unsigned int"
    )


def test_out_of_bounds_signed_index():
    array = TypeDescriptor(kind=2, info=0, name="int[4]")
    out, rep = make()
    rep.out_of_bounds(LOC, array, SIGNED_INT, -1)
    assert message(out) == "index -1 out of bounds for type int[4]"


def test_nonnull_arg():
    out, rep = make()
    rep.nonnull_arg(LOC, SourceLocation("lib.h", 3, 4), 2)
    assert message(out) == (
        "parameter 2 at lib.h:3:4 is declared as non-null but null was passed"
    )


def test_nonnull_return():
    out, rep = make()
    rep.nonnull_return(LOC, SourceLocation("lib.c", 40, 1))
    assert message(out) == (
        "function at lib.c:40:1 is declared as non-null returning but returned null"
    )


def test_load_invalid_value_int_and_other():
    int_type = TypeDescriptor(kind=1, info=1, name="signed char")
    out, rep = make()
    rep.load_invalid_value(LOC, int_type, -4)
    assert message(out) == (
        "load of value -4, which is not a valid value for type signed char"
    )

    bool_type = TypeDescriptor(kind=0, info=0, name="_Bool")
    out2, rep2 = make()
    rep2.load_invalid_value(LOC, bool_type, 2)
    assert message(out2) == (
        "load of value, which is not a valid value for type _Bool"
    )


def test_vla_bound():
    out, rep = make()
    rep.vla_bound_not_positive(LOC, 0)
    assert message(out) == "variable length array bound 0 is not positive"


def test_function_type_mismatch():
    fn_type = TypeDescriptor(kind=0xFFFF, info=0, name="void (*)(int)")
    out, rep = make()
    rep.function_type_mismatch(LOC, fn_type, 0x10)
    assert message(out) == (
        "call through function pointer *0x10 to incorrect function type void (*)(int)"
    )


def test_unknown_type_check_kind_raises():
    _, rep = make()
    with pytest.raises(IndexError):
        rep.type_mismatch(LOC, SIGNED_INT, 4, 42, 0)