"""
These most-fundamental classes sit apart from the concrete syntax
so that every later pass can import them without circularity.
Tokens arrive from an external scanner; the abstract node classes
are what the resolver and evaluator agree to dispatch over.
"""
from enum import Enum, auto
from typing import NamedTuple, Any

class Kind(Enum):
	# Single-character tokens.
	LEFT_PAREN = auto()
	RIGHT_PAREN = auto()
	LEFT_BRACE = auto()
	RIGHT_BRACE = auto()
	COMMA = auto()
	DOT = auto()
	MINUS = auto()
	PLUS = auto()
	SEMICOLON = auto()
	SLASH = auto()
	STAR = auto()

	# One or two character tokens.
	BANG = auto()
	BANG_EQUAL = auto()
	EQUAL = auto()
	EQUAL_EQUAL = auto()
	GREATER = auto()
	GREATER_EQUAL = auto()
	LESS = auto()
	LESS_EQUAL = auto()

	# Literals.
	IDENTIFIER = auto()
	STRING = auto()
	NUMBER = auto()

	# Keywords.
	AND = auto()
	CLASS = auto()
	ELSE = auto()
	FALSE = auto()
	FUN = auto()
	FOR = auto()
	IF = auto()
	NIL = auto()
	OR = auto()
	PRINT = auto()
	RETURN = auto()
	SUPER = auto()
	THIS = auto()
	TRUE = auto()
	VAR = auto()
	WHILE = auto()

	EOF = auto()

class Token(NamedTuple):
	""" One categorized lexeme, as the scanner hands it over. """
	kind: Kind
	lexeme: str
	literal: Any
	line: int

	def __str__(self): return "%s %s %s" % (self.kind.name, self.lexeme, self.literal)

# Names the evaluator binds in synthetic frames around method bodies.
THIS = "this"
SUPER = "super"
INIT = "init"

class Phrase:
	"""
	Syntax nodes compare and hash by identity:
	the resolution table is keyed on the node itself, not its text.
	"""
	def __repr__(self): return "<%s>" % type(self).__name__

class Expression(Phrase): pass

class Statement(Phrase): pass

class RuntimeFault(Exception):
	"""
	Runtime errors carry the offending token.
	Nothing catches these short of Interpreter.execute.
	"""
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message
