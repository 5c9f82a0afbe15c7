"""
The set of parse-nodes in simple form.
An external parser calls these constructors bottom-up.
The set is closed: the resolver and the evaluator each carry
exactly one visit-method per class defined here.
"""
from typing import Optional, Any, Sequence
from .ontology import Expression, Statement, Token

###############################################################################
# Expressions

class Literal(Expression):
	def __init__(self, value:Any): self.value = value
	def __repr__(self): return "<lit:%r>" % (self.value,)

class Grouping(Expression):
	def __init__(self, expression:Expression): self.expression = expression

class Unary(Expression):
	def __init__(self, op:Token, right:Expression):
		self.op, self.right = op, right

class Binary(Expression):
	def __init__(self, left:Expression, op:Token, right:Expression):
		self.left, self.op, self.right = left, op, right

class Logical(Expression):
	""" Same shape as Binary, but `and`/`or` short-circuit. """
	def __init__(self, left:Expression, op:Token, right:Expression):
		self.left, self.op, self.right = left, op, right

class Variable(Expression):
	def __init__(self, name:Token): self.name = name
	def __repr__(self): return "<ref:%s>" % self.name.lexeme

class Assign(Expression):
	def __init__(self, name:Token, value:Expression):
		self.name, self.value = name, value

class Call(Expression):
	# The closing paren locates runtime errors about the call.
	def __init__(self, callee:Expression, paren:Token, arguments:Sequence[Expression]):
		self.callee, self.paren, self.arguments = callee, paren, arguments

class Get(Expression):
	def __init__(self, object:Expression, name:Token):
		self.object, self.name = object, name

class Set(Expression):
	def __init__(self, object:Expression, name:Token, value:Expression):
		self.object, self.name, self.value = object, name, value

class This(Expression):
	def __init__(self, keyword:Token): self.keyword = keyword
	def __repr__(self): return "<THIS>"

class Super(Expression):
	def __init__(self, keyword:Token, method:Token):
		self.keyword, self.method = keyword, method
	def __repr__(self): return "<super.%s>" % self.method.lexeme

###############################################################################
# Statements

class ExpressionStatement(Statement):
	def __init__(self, expression:Expression): self.expression = expression

class Print(Statement):
	def __init__(self, expression:Expression): self.expression = expression

class Block(Statement):
	def __init__(self, statements:Sequence[Statement]): self.statements = statements

class If(Statement):
	def __init__(self, condition:Expression, then_branch:Statement, else_branch:Optional[Statement]=None):
		self.condition = condition
		self.then_branch = then_branch
		self.else_branch = else_branch

class While(Statement):
	def __init__(self, condition:Expression, body:Statement):
		self.condition, self.body = condition, body

class Var(Statement):
	def __init__(self, name:Token, initializer:Optional[Expression]=None):
		self.name, self.initializer = name, initializer
	def __repr__(self): return "<var %s>" % self.name.lexeme

class Function(Statement):
	""" Serves both for free-standing functions and for methods within a class. """
	def __init__(self, name:Token, params:Sequence[Token], body:Sequence[Statement]):
		self.name = name
		self.params = params
		self.body = body
	def __repr__(self): return "<fun %s/%d>" % (self.name.lexeme, len(self.params))

class Class(Statement):
	def __init__(self, name:Token, superclass:Optional[Variable], methods:Sequence[Function]):
		assert superclass is None or isinstance(superclass, Variable), superclass
		self.name = name
		self.superclass = superclass
		self.methods = methods
	def __repr__(self): return "<class %s>" % self.name.lexeme

class Return(Statement):
	def __init__(self, keyword:Token, value:Optional[Expression]=None):
		self.keyword, self.value = keyword, value
