import unittest

from loam.environment import Environment
from loam.ontology import RuntimeFault
from scaffold import name

class ChainTests(unittest.TestCase):

	def test_define_overwrites_in_place(self):
		env = Environment()
		env.define("a", 1.0)
		env.define("a", 2.0)
		self.assertEqual(2.0, env.get(name("a")))

	def test_get_searches_outward(self):
		outer = Environment()
		outer.define("a", "outer")
		inner = Environment(Environment(outer))
		self.assertEqual("outer", inner.get(name("a")))

	def test_undefined_variable(self):
		env = Environment(Environment())
		for action in (lambda: env.get(name("zork", 7)), lambda: env.assign(name("zork", 7), 1.0)):
			with self.subTest(action):
				with self.assertRaises(RuntimeFault) as cm:
					action()
				self.assertEqual("Undefined variable 'zork'.", cm.exception.message)
				self.assertEqual(7, cm.exception.token.line)

	def test_assign_mutates_nearest_binding_only(self):
		outer = Environment()
		outer.define("a", 1.0)
		inner = Environment(outer)
		inner.define("a", 2.0)
		inner.assign(name("a"), 3.0)
		self.assertEqual(3.0, inner.values["a"])
		self.assertEqual(1.0, outer.values["a"])

	def test_global_frame_has_no_parent(self):
		self.assertIsNone(Environment().enclosing)

class DepthTests(unittest.TestCase):
	""" get_at and assign_at honor the depth exactly, even when a nearer frame shares the name. """

	def setUp(self):
		self.frames = [Environment()]
		for i in range(1, 6):
			self.frames.append(Environment(self.frames[-1]))
		for i, frame in enumerate(self.frames):
			frame.define("x", float(i))
		self.innermost = self.frames[-1]

	def test_every_depth_lands_on_its_own_frame(self):
		for depth in range(len(self.frames)):
			with self.subTest(depth=depth):
				expect = self.frames[-1 - depth]
				self.assertIs(expect, self.innermost.ancestor(depth))
				self.assertEqual(expect.values["x"], self.innermost.get_at(depth, "x"))

	def test_assign_at_touches_only_the_landed_frame(self):
		self.innermost.assign_at(3, name("x"), "changed")
		values = [frame.values["x"] for frame in self.frames]
		self.assertEqual([0.0, 1.0, "changed", 3.0, 4.0, 5.0], values)

	def test_get_at_does_not_search(self):
		lonely = Environment(self.innermost)
		with self.assertRaises(KeyError):
			lonely.get_at(0, "x")

if __name__ == '__main__':
	unittest.main()
