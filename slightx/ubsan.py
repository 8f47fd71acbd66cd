"""Reports of undefined behaviour detected by compiler instrumentation.

Each handler writes a framed report describing one runtime check failure.
Handlers asked to abort, or a reporter configured to always abort, raise
:class:`UndefinedBehaviorAbort` once the report has been written.
"""

from dataclasses import dataclass

from .log import Logger

_U64_MASK = (1 << 64) - 1

TYPE_CHECK_KINDS = (
    "load of",
    "store to",
    "reference binding to",
    "member access within",
    "member call on",
    "constructor call on",
    "downcast of",
    "downcast of",
    "upcast of",
    "cast to virtual base of",
)

_BANNER = "======== UNDEFINED BEHAVIOR DETECTED ========"
_SEPARATOR = "---------------------------------------------"
_FOOTER = "============================================="


def _to_i64(value):
    value &= _U64_MASK
    return value - (1 << 64) if value >= (1 << 63) else value


@dataclass(frozen=True)
class SourceLocation:
    """A position in a source file."""

    filename: str
    line: int
    column: int


@dataclass(frozen=True)
class TypeDescriptor:
    """The compiler's description of a checked type."""

    kind: int
    info: int
    name: str

    @property
    def is_signed(self):
        return (self.info & 1) != 0

    @property
    def is_int(self):
        return (self.kind & 0xF) == 1

    @property
    def width(self):
        """The width of an integer type in bits."""
        return 1 << (self.info >> 1)


class UndefinedBehaviorAbort(Exception):
    """Raised after a report when execution must not continue."""

    def __init__(self, description):
        super().__init__(description)
        self.description = description


class Reporter:
    """Writes undefined-behaviour reports through ``write``, one line at a time."""

    def __init__(self, write, always_abort=False):
        self._out = Logger(write)
        self._always_abort = always_abort

    def _begin(self, location, description):
        eprint = self._out.log
        eprint(_BANNER)
        eprint("Description: %s", description)
        eprint("Location:")
        eprint("  file: %s", location.filename)
        eprint("  line: %u", location.line)
        eprint("  column: %u", location.column)
        eprint(_SEPARATOR)

    def _end(self, description, abort):
        self._out.log(_FOOTER)
        if self._always_abort or abort:
            raise UndefinedBehaviorAbort(description)

    def _report(self, location, description, abort, fmt, *args):
        self._begin(location, description)
        self._out.log(fmt, *args)
        self._end(description, abort)

    def type_mismatch(self, location, type, alignment, type_check_kind, ptr, abort=False):
        """Report a null, misaligned or undersized access through a pointer."""
        kind = TYPE_CHECK_KINDS[type_check_kind]
        if ptr == 0:
            self._report(
                location, "Null pointer dereference", abort,
                "%s null pointer of type %s", kind, type.name,
            )
        elif alignment != 0 and (ptr & (alignment - 1)) != 0:
            self._report(
                location, "Unaligned access", abort,
                "%s unaligned pointer %p of type %s (alignment %u)",
                kind, ptr, type.name, alignment,
            )
        else:
            self._report(
                location, "Insufficient object size", abort,
                "%s address %p with insufficient space for type %s",
                kind, ptr, type.name,
            )

    def type_mismatch_v1(self, location, type, log_alignment, type_check_kind, ptr, abort=False):
        """Like :meth:`type_mismatch`, with the alignment given as a power of two."""
        self.type_mismatch(
            location, type, 1 << log_alignment, type_check_kind, ptr, abort
        )

    def pointer_overflow(self, location, base, result, abort=False):
        self._report(
            location, "Pointer overflow", abort,
            "Pointer operation overflow %p to %p", base, result,
        )

    def invalid_builtin(self, location, kind, abort=False):
        description = "Invalid builtin"
        self._begin(location, description)
        if kind == 0:
            self._out.log("Passed 0 to clz()")
        elif kind == 1:
            self._out.log("Passed 0 to ctz()")
        else:
            self._out.log("Passed 0 to <unknown> (kind: %u)", kind)
        self._end(description, abort)

    def _int_overflow(self, location, type, lhs, rhs, op, abort):
        if type.is_signed:
            self._report(
                location, "Signed Integer overflow", abort,
                "%d %s %d can't be represented in type %s",
                lhs, op, rhs, type.name,
            )
        else:
            self._report(
                location, "Unsigned Integer overflow", abort,
                "%u %s %u can't be represented in type %s",
                lhs, op, rhs, type.name,
            )

    def add_overflow(self, location, type, lhs, rhs, abort=False):
        self._int_overflow(location, type, lhs, rhs, "+", abort)

    def sub_overflow(self, location, type, lhs, rhs, abort=False):
        self._int_overflow(location, type, lhs, rhs, "-", abort)

    def mul_overflow(self, location, type, lhs, rhs, abort=False):
        self._int_overflow(location, type, lhs, rhs, "*", abort)

    def negate_overflow(self, location, type, operand, abort=False):
        fmt = (
            "-%d can't be represented in type %s"
            if type.is_signed
            else "-%u can't be represented in type %s"
        )
        self._report(location, "Negation overflow", abort, fmt, operand, type.name)

    def divrem_overflow(self, location, type, lhs, rhs, abort=False):
        description = "Division overflow"
        self._begin(location, description)
        if type.is_signed and _to_i64(rhs) == -1:
            self._out.log(
                "%d / -1 can't be represented in type %s", lhs, type.name
            )
        elif rhs & _U64_MASK == 0:
            self._out.log("division by zero")
        else:
            self._out.log(
                "%u / %u can't be represented in type %s", lhs, rhs, type.name
            )
        self._end(description, abort)

    def shift_out_of_bounds(self, location, lhs_type, rhs_type, lhs, rhs, abort=False):
        description = "Shift out of bounds"
        self._begin(location, description)
        if rhs_type.is_signed and _to_i64(rhs) < 0:
            self._out.log("shift exponent %d is negative", rhs)
        elif rhs & _U64_MASK >= lhs_type.width:
            self._out.log(
                "shift exponent %d is too large for type %s", rhs, lhs_type.name
            )
        elif lhs_type.is_signed and _to_i64(lhs) < 0:
            self._out.log("left shift of negative type %s", lhs_type.name)
        else:
            self._out.log(
                "left shift of %u by %u places cannot be represented in type %s",
                lhs, rhs, lhs_type.name,
            )
        self._end(description, abort)

    def out_of_bounds(self, location, array_type, index_type, index, abort=False):
        fmt = (
            "index %d out of bounds for type %s"
            if index_type.is_signed
            else "index %u out of bounds for type %s"
        )
        self._report(location, "Out of bounds", abort, fmt, index, array_type.name)

    def builtin_unreachable(self, location):
        """Report reaching unreachable code; this always aborts."""
        self._report(
            location, "Unreachable", True,
            "Execution reached an unreachable code path",
        )

    def nonnull_arg(self, location, param_location, param_index, abort=False):
        self._report(
            location, "Non-null argument", abort,
            "parameter %u at %s:%u:%u is declared as non-null but null was passed",
            param_index,
            param_location.filename,
            param_location.line,
            param_location.column,
        )

    def nonnull_return(self, location, ret_location, abort=False):
        self._report(
            location, "Non-null return", abort,
            "function at %s:%u:%u is declared as non-null returning but returned null",
            ret_location.filename,
            ret_location.line,
            ret_location.column,
        )

    def load_invalid_value(self, location, type, value, abort=False):
        description = "Invalid value"
        self._begin(location, description)
        if type.is_int:
            fmt = (
                "load of value %d, which is not a valid value for type %s"
                if type.is_signed
                else "load of value %u, which is not a valid value for type %s"
            )
            self._out.log(fmt, value, type.name)
        else:
            self._out.log(
                "load of value, which is not a valid value for type %s", type.name
            )
        self._end(description, abort)

    def vla_bound_not_positive(self, location, bound, abort=False):
        self._report(
            location, "Variable length array bound not positive", abort,
            "variable length array bound %d is not positive", bound,
        )

    def function_type_mismatch(self, location, type, func_ptr, abort=False):
        self._report(
            location, "Function type mismatch", abort,
            "call through function pointer %p to incorrect function type %s",
            func_ptr, type.name,
        )