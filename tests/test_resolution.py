import unittest
from unittest import mock

from loam.diagnostics import Report
from loam.resolution import Resolver
from scaffold import (
	ref, assign, num, text, call, get, this, super_,
	expr, show, let, block, ret, fun, klass, run,
)

def _resolve(*statements):
	report = Report()
	depths = Resolver(report).resolve(list(statements))
	return report, depths

def _messages(report):
	return [issue.message for issue in report.issues]

class DepthTests(unittest.TestCase):

	def test_globals_stay_unresolved(self):
		use = ref("a")
		report, depths = _resolve(let("a", num(1)), show(use))
		self.assertTrue(report.ok())
		self.assertNotIn(use, depths)

	def test_depth_counts_enclosing_blocks(self):
		for nesting in range(4):
			with self.subTest(nesting=nesting):
				use = ref("a")
				body = show(use)
				for _ in range(nesting):
					body = block(body)
				report, depths = _resolve(block(let("a", num(1)), body))
				self.assertTrue(report.ok())
				self.assertEqual(nesting, depths[use])

	def test_identity_not_name(self):
		# Same text, two nodes, two different answers.
		near, far = ref("a"), ref("a")
		program = block(
			let("a", num(1)),
			block(show(far), let("a", num(2)), show(near)),
		)
		report, depths = _resolve(program)
		self.assertTrue(report.ok())
		self.assertEqual(1, depths[far])
		self.assertEqual(0, depths[near])

	def test_assignment_resolves_too(self):
		target = assign("a", num(2))
		_, depths = _resolve(block(let("a", num(1)), block(expr(target))))
		self.assertEqual(1, depths[target])

	def test_function_parameters_and_closure(self):
		param_use, captured_use = ref("n"), ref("k")
		program = block(
			let("k", num(1)),
			fun("f", ["n"], ret(param_use), expr(captured_use)),
		)
		_, depths = _resolve(program)
		self.assertEqual(0, depths[param_use])
		self.assertEqual(1, depths[captured_use])

	def test_this_and_super_frames(self):
		t, s = this(), super_("m")
		program = [
			klass("A", fun("m", [])),
			klass("B", fun("m", [], expr(call(s)), expr(t)), superclass="A"),
		]
		report, depths = _resolve(*program)
		self.assertTrue(report.ok())
		self.assertEqual(1, depths[t])  # method scope, then `this` scope
		self.assertEqual(2, depths[s])  # ... then `super` scope

	def test_table_accumulates_across_units(self):
		report = Report()
		resolver = Resolver(report)
		first, second = ref("a"), ref("b")
		resolver.resolve([block(let("a"), show(first))])
		depths = resolver.resolve([block(let("b"), show(second))])
		self.assertEqual({first: 0, second: 0}, depths)

class StaticErrorTests(unittest.TestCase):

	def expect(self, message, *statements):
		report, _ = _resolve(*statements)
		self.assertIn(message, _messages(report))

	def test_own_initializer(self):
		self.expect("Can't read local variable in its own initializer.", block(let("a", ref("a"))))

	def test_own_initializer_is_fine_at_global_scope(self):
		report, _ = _resolve(let("a", ref("a")))
		self.assertTrue(report.ok())

	def test_duplicate_in_block(self):
		self.expect("Already a variable with this name in this scope.", block(let("a"), let("a")))

	def test_duplicate_parameter(self):
		self.expect("Already a variable with this name in this scope.", fun("f", ["a", "a"]))

	def test_redeclaring_a_global_is_fine(self):
		report, _ = _resolve(let("a"), let("a"))
		self.assertTrue(report.ok())

	def test_top_level_return(self):
		self.expect("Can't return from top-level code.", ret())

	def test_value_from_initializer(self):
		self.expect("Can't return a value from an initializer.", klass("A", fun("init", [], ret(num(5)))))

	def test_bare_return_from_initializer_is_fine(self):
		report, _ = _resolve(klass("A", fun("init", [], ret())))
		self.assertTrue(report.ok())

	def test_this_outside_class(self):
		self.expect("Can't use 'this' outside of a class.", show(this()))
		self.expect("Can't use 'this' outside of a class.", fun("f", [], ret(this())))

	def test_super_outside_class(self):
		self.expect("Can't use 'super' outside of a class.", expr(call(super_("m"))))

	def test_super_without_superclass(self):
		self.expect("Can't use 'super' in a class with no superclass.", klass("A", fun("m", [], expr(call(super_("m"))))))

	def test_self_inheritance(self):
		self.expect("A class can't inherit from itself.", klass("A", superclass="A"))

	def test_collects_every_issue_in_one_pass(self):
		report, _ = _resolve(
			ret(),
			show(this()),
			block(let("a"), let("a")),
			klass("A", superclass="A"),
		)
		self.assertEqual(4, len(report.issues))

class SuppressionTests(unittest.TestCase):

	def test_static_errors_prevent_execution(self):
		# The bad class comes after the print, yet nothing prints.
		report, printed = run(show(text("too soon")), klass("A", superclass="A"))
		self.assertTrue(report.sick())
		self.assertEqual([], printed)
		self.assertFalse(report.had_runtime_error)

	def test_verbose_report_says_so(self):
		report = Report(verbose=1)
		with mock.patch("builtins.print") as fake_print:
			run(ret(), report=report)
		self.assertTrue(fake_print.called)

if __name__ == '__main__':
	unittest.main()
