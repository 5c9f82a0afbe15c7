"""
Chained scope frames: the canonical list-structured search.

Frames are shared by reference. A closure, a bound method, and an active
call may all hold the same frame, and a mutation through one is visible
through every other.
"""
from typing import Any, Optional
from .ontology import Token, RuntimeFault

class Environment:
	values: dict[str, Any]
	enclosing: Optional["Environment"]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self.values = {}
		self.enclosing = enclosing

	def __repr__(self):
		return "<Environment %s>" % ', '.join(self.values)

	def define(self, name:str, value:Any):
		""" Insert or overwrite, in this frame only. Redeclaration is fine. """
		self.values[name] = value

	def get(self, name:Token) -> Any:
		env = self
		while env is not None:
			if name.lexeme in env.values:
				return env.values[name.lexeme]
			env = env.enclosing
		raise _undefined(name)

	def assign(self, name:Token, value:Any):
		env = self
		while env is not None:
			if name.lexeme in env.values:
				env.values[name.lexeme] = value
				return
			env = env.enclosing
		raise _undefined(name)

	def ancestor(self, depth:int) -> "Environment":
		env = self
		for _ in range(depth):
			env = env.enclosing
		return env

	def get_at(self, depth:int, name:str) -> Any:
		# Only the landed frame: an intermediate frame may hold the same name.
		return self.ancestor(depth).values[name]

	def assign_at(self, depth:int, name:Token, value:Any):
		self.ancestor(depth).values[name.lexeme] = value

def _undefined(name:Token):
	return RuntimeFault(name, "Undefined variable '%s'." % name.lexeme)
