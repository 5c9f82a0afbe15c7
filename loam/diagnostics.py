import sys, random
from typing import Optional

from .ontology import Token, Kind

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens', 'Nuts', 'Rats',
	]

	resignations = [
		'I cannot continue.',
		'This program will not run as written.',
		'Something needs fixing.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Issue:
	""" One complaint about one token. """
	def __init__(self, token:Optional[Token], message:str):
		self.token, self.message = token, message

	def where(self) -> str:
		if self.token is None: return ""
		if self.token.kind is Kind.EOF: return " at end"
		return " at '%s'" % self.token.lexeme

	def as_text(self):
		line = self.token.line if self.token is not None else "?"
		return "[line %s] Error%s: %s" % (line, self.where(), self.message)

class Fault(Issue):
	""" A runtime error, as reported after it unwinds to the top. """
	def as_text(self):
		return "%s\n[line %d]" % (self.message, self.token.line)

class Report:
	"""
	The shared reporting facility.

	The resolver files static issues here and carries on, so that one
	pass can find every problem. The interpreter files at most one
	runtime fault per top-level `execute`. Nothing gets printed until
	the host asks, except verbose progress notes via `info`.
	"""
	_issues : list[Issue]
	_faults : list[Fault]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._faults = []

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def had_runtime_error(self) -> bool: return bool(self._faults)

	@property
	def issues(self) -> list[Issue]: return list(self._issues)

	@property
	def faults(self) -> list[Fault]: return list(self._faults)

	def reset(self):
		""" An interactive host calls this between input units: a mistake should not kill the session. """
		self._issues.clear()
		self._faults.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def error(self, token:Token, msg:str):
		""" Actually make an entry of a static issue """
		assert isinstance(token, Token), token
		self._issues.append(Issue(token, msg))

	def runtime_error(self, fault):
		""" Accepts the RuntimeFault that unwound out of the evaluator. """
		self._faults.append(Fault(fault.token, fault.message))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues + self._faults)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues or self._faults:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

def _bemoan(issues):
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
