"""
What the evaluator and the value classes agree a value is,
plus the signal a `return` sends up toward its call.
"""

from typing import Any, NamedTuple, Optional, Sequence

# nil, boolean, number and text play themselves as None, bool, float and str.
VALUE = Any  # or else one of the classes in .values
ARGS = Sequence[VALUE]

class Returning(NamedTuple):
	"""
	What a statement yields when a `return` is unwinding toward its call.
	Normal completion yields None instead; it never travels as an exception.
	"""
	value: VALUE

SIGNAL = Optional[Returning]
