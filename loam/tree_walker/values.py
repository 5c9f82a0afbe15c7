"""
Run-time values that need more than a native Python object can offer:
callables of every sort, and the instances that classes make.
"""
from abc import ABC, abstractmethod
from typing import Optional, Callable as PyCallable
from .. import syntax
from ..ontology import Token, RuntimeFault, THIS, INIT
from ..environment import Environment
from .types import ARGS, VALUE

class Callable(ABC):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, interpreter, arguments: ARGS) -> VALUE: pass

class Function(Callable):
	""" The run-time manifestation of a function: a callable value tied to its natal environment. """
	# The same Function type serves for free functions, methods and initializers.

	def __init__(self, declaration: syntax.Function, closure: Environment, is_initializer: bool = False):
		self.declaration = declaration
		self.closure = closure
		self.is_initializer = is_initializer

	def __str__(self): return "<fn %s>" % self.declaration.name.lexeme

	def arity(self) -> int: return len(self.declaration.params)

	def bind(self, instance: "Instance") -> "Function":
		environment = Environment(self.closure)
		environment.define(THIS, instance)
		return Function(self.declaration, environment, self.is_initializer)

	def call(self, interpreter, arguments: ARGS) -> VALUE:
		environment = Environment(self.closure)
		for param, arg in zip(self.declaration.params, arguments):
			environment.define(param.lexeme, arg)
		signal = interpreter.execute_block(self.declaration.body, environment)
		# Initializers always produce the instance, whatever `return;` carried.
		if self.is_initializer: return self.closure.get_at(0, THIS)
		if signal is not None: return signal.value
		return None

class Primitive(Callable):
	""" Native functions. All arguments arrive already evaluated. """
	def __init__(self, name: str, arity: int, fn: PyCallable):
		self.name = name
		self._arity = arity
		self._fn = fn

	def __str__(self): return "<native fn>"
	def __repr__(self): return "<native fn %s/%d>" % (self.name, self._arity)

	def arity(self) -> int: return self._arity

	def call(self, interpreter, arguments: ARGS) -> VALUE:
		return self._fn(*arguments)

class Class(Callable):
	"""
	Calling a class makes an instance and runs `init` on it if there is one.
	The superclass chain is a singly-linked list searched nearest-first.
	"""
	def __init__(self, name: str, superclass: Optional["Class"], methods: dict[str, Function]):
		self.name = name
		self.superclass = superclass
		self._methods = methods

	def __str__(self): return self.name

	def find_method(self, name: str) -> Optional[Function]:
		klass = self
		while klass is not None:
			if name in klass._methods:
				return klass._methods[name]
			klass = klass.superclass
		return None

	def arity(self) -> int:
		initializer = self.find_method(INIT)
		return 0 if initializer is None else initializer.arity()

	def call(self, interpreter, arguments: ARGS) -> VALUE:
		instance = Instance(self)
		initializer = self.find_method(INIT)
		if initializer is not None:
			initializer.bind(instance).call(interpreter, arguments)
		return instance

class Instance:
	""" A mutable bag of fields, plus a class to find methods in. """
	def __init__(self, klass: Class):
		self.klass = klass
		self.fields = {}

	def __str__(self): return "%s instance" % self.klass.name

	def get(self, name: Token) -> VALUE:
		# Fields shadow methods of the same name.
		if name.lexeme in self.fields:
			return self.fields[name.lexeme]
		method = self.klass.find_method(name.lexeme)
		if method is not None:
			return method.bind(self)
		raise RuntimeFault(name, "Undefined property '%s'." % name.lexeme)

	def set(self, name: Token, value: VALUE):
		self.fields[name.lexeme] = value
