"""
All the scope-resolution stuff goes here.
By the time this pass is finished, every local variable reference
knows how many frames out its binding lives, and every misuse of
`this`, `super`, and `return` that can be seen statically has been
reported.
"""
from enum import Enum
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .ontology import Expression, Statement, Token, THIS, SUPER, INIT

class FunctionKind(Enum):
	NONE = "none"
	FUNCTION = "function"
	INITIALIZER = "initializer"
	METHOD = "method"

class ClassKind(Enum):
	NONE = "none"
	CLASS = "class"
	SUBCLASS = "subclass"

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items, *args):
		for i in items:
			self.visit(i, *args)

	def visit_Literal(self, expr: syntax.Literal, *args): pass

	def visit_Grouping(self, expr: syntax.Grouping, *args):
		self.visit(expr.expression, *args)

	def visit_Unary(self, expr: syntax.Unary, *args):
		self.visit(expr.right, *args)

	def visit_Binary(self, expr: syntax.Binary, *args):
		self.visit(expr.left, *args)
		self.visit(expr.right, *args)

	def visit_Logical(self, expr: syntax.Logical, *args):
		self.visit(expr.left, *args)
		self.visit(expr.right, *args)

	def visit_Call(self, expr: syntax.Call, *args):
		self.visit(expr.callee, *args)
		self.tour(expr.arguments, *args)

	def visit_Get(self, expr: syntax.Get, *args):
		# Property names are dynamic; only the receiver has anything to resolve.
		self.visit(expr.object, *args)

	def visit_Set(self, expr: syntax.Set, *args):
		self.visit(expr.value, *args)
		self.visit(expr.object, *args)

	def visit_ExpressionStatement(self, stmt: syntax.ExpressionStatement, *args):
		self.visit(stmt.expression, *args)

	def visit_Print(self, stmt: syntax.Print, *args):
		self.visit(stmt.expression, *args)

	def visit_If(self, stmt: syntax.If, *args):
		self.visit(stmt.condition, *args)
		self.visit(stmt.then_branch, *args)
		if stmt.else_branch is not None:
			self.visit(stmt.else_branch, *args)

	def visit_While(self, stmt: syntax.While, *args):
		self.visit(stmt.condition, *args)
		self.visit(stmt.body, *args)

class Resolver(TopDown):
	"""
	This single top-down tree-walk does two things:

	* Connect each local variable reference (and each `this` and `super`)
	  to the number of frames between its use and its binding.
	* Complain about things which cannot be right no matter what happens at run-time.

	References found in no enclosing scope are left out of the table:
	the evaluator assumes those are global, and checks them only when used.

	Complaints go to the report; the walk always carries on to the end.
	"""
	report: Report
	depths: dict[Expression, int]

	_scopes: list[dict[str, bool]]  # name -> has the initializer finished?
	_current_function: FunctionKind
	_current_class: ClassKind

	def __init__(self, report:Report, depths:Optional[dict[Expression, int]]=None):
		self.report = report
		self.depths = {} if depths is None else depths
		self._scopes = []
		self._current_function = FunctionKind.NONE
		self._current_class = ClassKind.NONE

	def resolve(self, statements:Sequence[Statement]) -> dict[Expression, int]:
		before = len(self.depths)
		self.tour(statements)
		self.report.info("Resolved %d local reference(s)." % (len(self.depths) - before))
		return self.depths

	# Scope book-keeping

	def _begin_scope(self):
		self._scopes.append({})

	def _end_scope(self):
		self._scopes.pop()

	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.lexeme in scope:
			self.report.error(name, "Already a variable with this name in this scope.")
		scope[name.lexeme] = False

	def _define(self, name:Token):
		if not self._scopes: return
		self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:Expression, key:str):
		for hops, scope in enumerate(reversed(self._scopes)):
			if key in scope:
				self.depths[expr] = hops
				return
		# Not found: leave unresolved and assume global.

	def _resolve_function(self, fn:syntax.Function, kind:FunctionKind):
		enclosing_function = self._current_function
		self._current_function = kind
		self._begin_scope()
		for param in fn.params:
			self._declare(param)
			self._define(param)
		self.tour(fn.body)
		self._end_scope()
		self._current_function = enclosing_function

	# Statements

	def visit_Block(self, stmt: syntax.Block):
		self._begin_scope()
		self.tour(stmt.statements)
		self._end_scope()

	def visit_Var(self, stmt: syntax.Var):
		self._declare(stmt.name)
		if stmt.initializer is not None:
			self.visit(stmt.initializer)
		self._define(stmt.name)

	def visit_Function(self, stmt: syntax.Function):
		# Defined before the body, so the function may call itself.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt, FunctionKind.FUNCTION)

	def visit_Class(self, stmt: syntax.Class):
		enclosing_class = self._current_class
		self._current_class = ClassKind.CLASS

		self._declare(stmt.name)
		self._define(stmt.name)

		superclass = stmt.superclass
		if superclass is not None:
			if superclass.name.lexeme == stmt.name.lexeme:
				self.report.error(superclass.name, "A class can't inherit from itself.")
			self._current_class = ClassKind.SUBCLASS
			self.visit(superclass)
			self._begin_scope()
			self._scopes[-1][SUPER] = True

		self._begin_scope()
		self._scopes[-1][THIS] = True
		for method in stmt.methods:
			kind = FunctionKind.INITIALIZER if method.name.lexeme == INIT else FunctionKind.METHOD
			self._resolve_function(method, kind)
		self._end_scope()

		if superclass is not None:
			self._end_scope()

		self._current_class = enclosing_class

	def visit_Return(self, stmt: syntax.Return):
		if self._current_function is FunctionKind.NONE:
			self.report.error(stmt.keyword, "Can't return from top-level code.")
		if stmt.value is not None:
			if self._current_function is FunctionKind.INITIALIZER:
				self.report.error(stmt.keyword, "Can't return a value from an initializer.")
			self.visit(stmt.value)

	# Expressions

	def visit_Variable(self, expr: syntax.Variable):
		if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
			self.report.error(expr.name, "Can't read local variable in its own initializer.")
		self._resolve_local(expr, expr.name.lexeme)

	def visit_Assign(self, expr: syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name.lexeme)

	def visit_This(self, expr: syntax.This):
		if self._current_class is ClassKind.NONE:
			self.report.error(expr.keyword, "Can't use 'this' outside of a class.")
			return
		self._resolve_local(expr, THIS)

	def visit_Super(self, expr: syntax.Super):
		if self._current_class is ClassKind.NONE:
			self.report.error(expr.keyword, "Can't use 'super' outside of a class.")
		elif self._current_class is not ClassKind.SUBCLASS:
			self.report.error(expr.keyword, "Can't use 'super' in a class with no superclass.")
		self._resolve_local(expr, SUPER)
