import unittest

from lox import builtin, lang, system
from lox.lang import Token

def name(word, line=1):
    return Token(line, 1, 'name', word, None)


class EnvironmentTestCase(unittest.TestCase):
    def setUp(self):
        self.globals = lang.Environment()
        self.globals.define('a', 1.0)
        self.inner = lang.Environment(lang.Environment(self.globals))
        self.inner.define('b', 2.0)

    def test_get(self):
        self.assertEqual(self.inner.get(name('a')), 1.0)
        self.assertEqual(self.inner.get(name('b')), 2.0)

    def test_get_undefined(self):
        with self.assertRaises(builtin.RuntimeError) as context:
            self.inner.get(name('c', line=4))
        self.assertEqual(
            context.exception.report(), "Undefined variable 'c'.\n[line 4]"
        )

    def test_define_shadows(self):
        self.inner.define('a', 'shadow')
        self.assertEqual(self.inner.get(name('a')), 'shadow')
        self.assertEqual(self.globals.get(name('a')), 1.0)

    def test_redefine(self):
        self.globals.define('a', None)
        self.assertIsNone(self.globals.get(name('a')))

    def test_assign(self):
        self.inner.assign(name('a'), 3.0)
        self.assertEqual(self.globals.get(name('a')), 3.0)
        self.assertFalse(self.inner.has('a'))

    def test_assign_undefined(self):
        with self.assertRaises(builtin.RuntimeError):
            self.inner.assign(name('c'), 3.0)
        self.assertIsNone(self.inner.lookup('c'))

    def test_depth(self):
        self.assertIs(self.inner.ancestor(2), self.globals)
        self.assertEqual(self.inner.getAt(2, 'a'), 1.0)
        self.inner.assignAt(2, name('a'), 'moved')
        self.assertEqual(self.globals.get(name('a')), 'moved')

    def test_globals(self):
        env = system.initGlobals(lang.Environment())
        clock = env.get(name('clock'))
        self.assertIsInstance(clock, lang.Builtin)
        self.assertEqual(clock.arity(), 0)
        self.assertIsInstance(clock.func(), float)


class OperatorTestCase(unittest.TestCase):
    def test_truthy(self):
        self.assertFalse(builtin.isTruthy(None))
        self.assertFalse(builtin.isTruthy(False))
        self.assertTrue(builtin.isTruthy(0.0))
        self.assertTrue(builtin.isTruthy(''))

    def test_equal(self):
        self.assertTrue(builtin.isEqual(None, None))
        self.assertFalse(builtin.isEqual(None, False))
        self.assertFalse(builtin.isEqual(1.0, True))
        self.assertFalse(builtin.isEqual(0.0, False))
        self.assertTrue(builtin.isEqual('a', 'a'))
        self.assertTrue(builtin.ne(1.0, '1'))

    def test_divide_by_zero(self):
        self.assertEqual(builtin.div(1.0, 0.0), builtin.INF)
        self.assertEqual(builtin.div(-1.0, 0.0), -builtin.INF)
        self.assertEqual(builtin.div(1.0, -0.0), -builtin.INF)
        nan = builtin.div(0.0, 0.0)
        self.assertNotEqual(nan, nan)
