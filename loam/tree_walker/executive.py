"""
The overall control: resolve once, then run if that went well.
"""
from typing import Optional, Sequence
from ..diagnostics import Report
from ..ontology import Statement
from ..resolution import Resolver
from .evaluator import Interpreter

def run_program(statements:Sequence[Statement], report:Report, interpreter:Optional[Interpreter]=None) -> Interpreter:
	"""
	Pass the same interpreter back in to keep its globals between input units.
	Static problems suppress execution; either way the report tells the tale.
	"""
	if interpreter is None: interpreter = Interpreter(report)
	depths = Resolver(report).resolve(statements)
	if report.sick():
		report.info("Not running: %d static issue(s)." % len(report.issues))
	else:
		interpreter.execute(statements, depths)
	return interpreter
