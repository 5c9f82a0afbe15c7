"""
Everything the evaluator leans on that is not tied to one kind of node:
truthiness, equality, printed forms, operator tables, and the
native functions that every fresh global frame starts out with.
"""
import math
import operator
import time
from decimal import Decimal
from ..ontology import Kind, Token, RuntimeFault
from ..environment import Environment
from .types import VALUE
from .values import Primitive

def is_truthy(value:VALUE) -> bool:
	""" Only nil and false are falsy. Zero and the empty string are not. """
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a:VALUE, b:VALUE) -> bool:
	# Python would have True == 1.0; this language would not.
	if isinstance(a, bool) != isinstance(b, bool): return False
	if isinstance(a, (bool, float, str)) or a is None:
		return type(a) is type(b) and a == b
	return a is b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, float):
		if math.isnan(value): return "NaN"
		if math.isinf(value): return "Infinity" if value > 0 else "-Infinity"
		return _number_text(value)
	return str(value)

def _number_text(value:float) -> str:
	"""
	Plain decimals from 1e-3 up to 1e7, scientific form outside that,
	like 1.0E300 or 2.5E-7, and never a trailing ".0" on the plain form.
	"""
	if value == 0 or 1e-3 <= abs(value) < 1e7:
		text = repr(value)
		return text[:-2] if text.endswith(".0") else text
	sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
	figures = "".join(map(str, digits))
	mantissa = figures[0] + "." + (figures[1:] or "0")
	return "%s%sE%d" % ("-" if sign else "", mantissa, exponent + len(digits) - 1)

def _divide(a:float, b:float) -> float:
	# Doubles divide by zero without complaint.
	if b == 0:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)
	return a / b

ARITHMETIC = {
	Kind.MINUS : operator.sub,
	Kind.STAR  : operator.mul,
	Kind.SLASH : _divide,
	Kind.GREATER : operator.gt,
	Kind.GREATER_EQUAL : operator.ge,
	Kind.LESS : operator.lt,
	Kind.LESS_EQUAL : operator.le,
}

EQUALITY = {
	Kind.EQUAL_EQUAL : is_equal,
	Kind.BANG_EQUAL : lambda a, b: not is_equal(a, b),
}

def _is_number(x:VALUE) -> bool:
	return isinstance(x, float) and not isinstance(x, bool)

def check_number_operand(op:Token, operand:VALUE):
	if not _is_number(operand):
		raise RuntimeFault(op, "Operand must be a number.")

def check_number_operands(op:Token, left:VALUE, right:VALUE):
	if not (_is_number(left) and _is_number(right)):
		raise RuntimeFault(op, "Operands must be numbers.")

def negate(op:Token, operand:VALUE) -> VALUE:
	check_number_operand(op, operand)
	return -operand

def plus(op:Token, left:VALUE, right:VALUE) -> VALUE:
	if _is_number(left) and _is_number(right):
		return left + right
	if isinstance(left, str) or isinstance(right, str):
		return stringify(left) + stringify(right)
	raise RuntimeFault(op, "Operands must be two numbers, or else one must be a string.")

def binary(op:Token, left:VALUE, right:VALUE) -> VALUE:
	kind = op.kind
	if kind is Kind.PLUS: return plus(op, left, right)
	if kind in EQUALITY: return EQUALITY[kind](left, right)
	check_number_operands(op, left, right)
	return ARITHMETIC[kind](left, right)

###############################################################################

NATIVES = [
	Primitive("clock", 0, time.time),
]

def fresh_globals() -> Environment:
	""" The outermost frame: no parent, and only the natives defined. """
	env = Environment()
	for native in NATIVES:
		env.define(native.name, native)
	return env
