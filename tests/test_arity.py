import unittest

import lox
from tests import run

TESTCODE = """
var calls = 0;
fun add(a, b) {
    calls = calls + 1;
    return a + b;
}
print add(1, 2);
add(1, 2, 3);
print "unreachable";
"""

class ArityTestCase(unittest.TestCase):
    def setUp(self):
        self.result = run(TESTCODE)

    def test_error(self):
        errors = self.result['errors']
        self.assertEqual(len(errors), 1)
        self.assertIs(type(errors[0]), lox.builtin.RuntimeError)
        self.assertEqual(errors[0].line, 8)
        self.assertEqual(
            errors[0].msg(), "Expected 2 arguments but got 3."
        )

    def test_body_not_executed(self):
        # The body ran only for the first call
        self.assertEqual(self.result['env'].getAt(0, 'calls'), 1.0)

    def test_output(self):
        # The runtime error aborts the rest of the program
        self.assertEqual(self.result['output'], "3\n")


class MethodArityTestCase(unittest.TestCase):
    def test_method(self):
        result = run("""
class Greeter {
    greet(name) { print "hi " + name; }
}
Greeter().greet();
""")
        self.assertEqual(
            result['report'], "Expected 1 arguments but got 0.\n[line 5]\n"
        )

    def test_native(self):
        result = run("clock(1);")
        self.assertEqual(
            result['report'], "Expected 0 arguments but got 1.\n[line 1]\n"
        )


class CallableTestCase(unittest.TestCase):
    def test_not_callable(self):
        result = run('"not a function"();')
        self.assertEqual(
            result['report'],
            "Can only call functions and classes.\n[line 1]\n",
        )

    def test_clock(self):
        result = run("var t = clock();\nprint t > 0;\nprint clock;")
        self.assertEqual(result['output'], "true\n<native fn>\n")
