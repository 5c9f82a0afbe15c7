"""
The tree-walking evaluator.

Every visit-method takes the environment explicitly, so a block's frame
simply falls out of use on every exit path, whether by normal completion,
a `return` on its way out, or a RuntimeFault unwinding to the top.

Statements yield None on normal completion or a Returning signal;
expressions yield values.
"""
import sys
from typing import Optional, Sequence, TextIO
from boozetools.support.foundation import Visitor
from .. import syntax
from ..diagnostics import Report
from ..environment import Environment
from ..ontology import Expression, Statement, Token, Kind, RuntimeFault, THIS, SUPER, INIT
from .types import VALUE, SIGNAL, Returning
from .values import Callable, Function, Class, Instance
from .runtime import is_truthy, stringify, negate, binary, fresh_globals

class Interpreter(Visitor):
	globals: Environment
	_depths: dict[Expression, int]

	def __init__(self, report:Report, out:Optional[TextIO]=None):
		self.report = report
		self.out = out if out is not None else sys.stdout
		self.globals = fresh_globals()
		self._depths = {}

	def execute(self, statements:Sequence[Statement], depths:Optional[dict[Expression, int]]=None):
		"""
		Run a top-level sequence. The resolution table accumulates,
		since closures from an earlier input unit may still get called.
		A runtime fault stops this sequence but not the interpreter.
		A `return` at top level, which only an unresolved program can hold,
		ends the sequence quietly.
		"""
		if depths: self._depths.update(depths)
		try:
			for stmt in statements:
				if self.visit(stmt, self.globals) is not None:
					self.report.info("Top-level return; the rest of this sequence is skipped.")
					return
		except RuntimeFault as fault:
			self.report.info("Runtime fault at line %d." % fault.token.line)
			self.report.runtime_error(fault)

	def execute_block(self, statements:Sequence[Statement], env:Environment) -> SIGNAL:
		for stmt in statements:
			signal = self.visit(stmt, env)
			if signal is not None: return signal
		return None

	def _look_up(self, name:Token, expr:Expression, env:Environment) -> VALUE:
		depth = self._depths.get(expr)
		if depth is None: return self.globals.get(name)
		return env.get_at(depth, name.lexeme)

	###########################################################################
	# Statements

	def visit_ExpressionStatement(self, stmt:syntax.ExpressionStatement, env:Environment) -> SIGNAL:
		self.visit(stmt.expression, env)

	def visit_Print(self, stmt:syntax.Print, env:Environment) -> SIGNAL:
		print(stringify(self.visit(stmt.expression, env)), file=self.out)

	def visit_Var(self, stmt:syntax.Var, env:Environment) -> SIGNAL:
		value = None
		if stmt.initializer is not None:
			value = self.visit(stmt.initializer, env)
		env.define(stmt.name.lexeme, value)

	def visit_Block(self, stmt:syntax.Block, env:Environment) -> SIGNAL:
		return self.execute_block(stmt.statements, Environment(env))

	def visit_If(self, stmt:syntax.If, env:Environment) -> SIGNAL:
		if is_truthy(self.visit(stmt.condition, env)):
			return self.visit(stmt.then_branch, env)
		elif stmt.else_branch is not None:
			return self.visit(stmt.else_branch, env)

	def visit_While(self, stmt:syntax.While, env:Environment) -> SIGNAL:
		while is_truthy(self.visit(stmt.condition, env)):
			signal = self.visit(stmt.body, env)
			if signal is not None: return signal

	def visit_Function(self, stmt:syntax.Function, env:Environment) -> SIGNAL:
		env.define(stmt.name.lexeme, Function(stmt, env))

	def visit_Return(self, stmt:syntax.Return, env:Environment) -> SIGNAL:
		value = None if stmt.value is None else self.visit(stmt.value, env)
		return Returning(value)

	def visit_Class(self, stmt:syntax.Class, env:Environment) -> SIGNAL:
		superclass = None
		if stmt.superclass is not None:
			superclass = self.visit(stmt.superclass, env)
			if not isinstance(superclass, Class):
				raise RuntimeFault(stmt.superclass.name, "Superclass must be a class.")

		env.define(stmt.name.lexeme, None)

		method_env = env
		if superclass is not None:
			method_env = Environment(env)
			method_env.define(SUPER, superclass)

		methods = {
			method.name.lexeme: Function(method, method_env, method.name.lexeme == INIT)
			for method in stmt.methods
		}
		klass = Class(stmt.name.lexeme, superclass, methods)
		env.assign(stmt.name, klass)

	###########################################################################
	# Expressions

	def visit_Literal(self, expr:syntax.Literal, env:Environment) -> VALUE:
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping, env:Environment) -> VALUE:
		return self.visit(expr.expression, env)

	def visit_Unary(self, expr:syntax.Unary, env:Environment) -> VALUE:
		right = self.visit(expr.right, env)
		if expr.op.kind is Kind.BANG: return not is_truthy(right)
		if expr.op.kind is Kind.MINUS: return negate(expr.op, right)
		raise AssertionError(expr.op)

	def visit_Binary(self, expr:syntax.Binary, env:Environment) -> VALUE:
		left = self.visit(expr.left, env)
		right = self.visit(expr.right, env)
		return binary(expr.op, left, right)

	def visit_Logical(self, expr:syntax.Logical, env:Environment) -> VALUE:
		left = self.visit(expr.left, env)
		if expr.op.kind is Kind.OR:
			if is_truthy(left): return left
		elif not is_truthy(left): return left
		return self.visit(expr.right, env)

	def visit_Variable(self, expr:syntax.Variable, env:Environment) -> VALUE:
		return self._look_up(expr.name, expr, env)

	def visit_Assign(self, expr:syntax.Assign, env:Environment) -> VALUE:
		value = self.visit(expr.value, env)
		depth = self._depths.get(expr)
		if depth is None: self.globals.assign(expr.name, value)
		else: env.assign_at(depth, expr.name, value)
		return value

	def visit_Call(self, expr:syntax.Call, env:Environment) -> VALUE:
		callee = self.visit(expr.callee, env)
		arguments = [self.visit(a, env) for a in expr.arguments]
		if not isinstance(callee, Callable):
			raise RuntimeFault(expr.paren, "Can only call functions and classes.")
		if len(arguments) != callee.arity():
			pattern = "Expected %d arguments but got %d."
			raise RuntimeFault(expr.paren, pattern % (callee.arity(), len(arguments)))
		try: return callee.call(self, arguments)
		except RecursionError:
			# The innermost call converts; outer calls see an ordinary fault.
			raise RuntimeFault(expr.paren, "Stack overflow.") from None

	def visit_Get(self, expr:syntax.Get, env:Environment) -> VALUE:
		receiver = self.visit(expr.object, env)
		if isinstance(receiver, Instance):
			return receiver.get(expr.name)
		raise RuntimeFault(expr.name, "Only instances have properties.")

	def visit_Set(self, expr:syntax.Set, env:Environment) -> VALUE:
		receiver = self.visit(expr.object, env)
		if not isinstance(receiver, Instance):
			raise RuntimeFault(expr.name, "Only instances have fields.")
		value = self.visit(expr.value, env)
		receiver.set(expr.name, value)
		return value

	def visit_This(self, expr:syntax.This, env:Environment) -> VALUE:
		return self._look_up(expr.keyword, expr, env)

	def visit_Super(self, expr:syntax.Super, env:Environment) -> VALUE:
		# The `this` frame always sits just inside the `super` frame.
		depth = self._depths[expr]
		superclass = env.get_at(depth, SUPER)
		instance = env.get_at(depth - 1, THIS)
		method = superclass.find_method(expr.method.lexeme)
		if method is None:
			raise RuntimeFault(expr.method, "Undefined property '%s'." % expr.method.lexeme)
		return method.bind(instance)
