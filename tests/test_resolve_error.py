import unittest

import lox
from tests import run

class ResolveErrorTestCase(unittest.TestCase):
    def assertReport(self, code, report):
        result = run(code)
        self.assertTrue(result['errors'])
        for err in result['errors']:
            self.assertIs(type(err), lox.builtin.LogicError)
        self.assertEqual(result['report'], report)
        self.assertEqual(result['output'], '')

    def test_redeclare_local(self):
        self.assertReport(
            "{\n  var a = 1;\n  var a = 2;\n}",
            "[line 3] Error at 'a': "
            "Already a variable with this name in this scope.\n",
        )

    def test_own_initializer(self):
        self.assertReport(
            "var a = 1;\n{ var a = a; }",
            "[line 2] Error at 'a': "
            "Can't read local variable in its own initializer.\n",
        )

    def test_top_level_return(self):
        self.assertReport(
            'print "not run";\nreturn 1;',
            "[line 2] Error at 'return': "
            "Can't return from top-level code.\n",
        )

    def test_initializer_return_value(self):
        self.assertReport(
            "class A {\n  init() { return 1; }\n}",
            "[line 2] Error at 'return': "
            "Can't return a value from an initializer.\n",
        )

    def test_this_outside_class(self):
        self.assertReport(
            "print this;",
            "[line 1] Error at 'this': "
            "Can't use 'this' outside of a class.\n",
        )

    def test_this_in_function(self):
        self.assertReport(
            "fun notMethod() { print this; }",
            "[line 1] Error at 'this': "
            "Can't use 'this' outside of a class.\n",
        )

    def test_super_outside_class(self):
        self.assertReport(
            "super.method();",
            "[line 1] Error at 'super': "
            "Can't use 'super' outside of a class.\n",
        )

    def test_super_without_superclass(self):
        self.assertReport(
            "class A {\n  m() { super.m(); }\n}",
            "[line 2] Error at 'super': "
            "Can't use 'super' in a class with no superclass.\n",
        )

    def test_inherit_from_self(self):
        self.assertReport(
            "class Ouroboros < Ouroboros {}",
            "[line 1] Error at 'Ouroboros': "
            "A class can't inherit from itself.\n",
        )

    def test_all_errors_reported(self):
        result = run("return 1;\nprint this;")
        self.assertEqual(len(result['errors']), 2)
        self.assertEqual([err.line for err in result['errors']], [1, 2])


class ResolveAllowedTestCase(unittest.TestCase):
    def test_redeclare_global(self):
        result = run("var a = 1;\nvar a = 2;\nprint a;")
        self.assertEqual(result['errors'], [])
        self.assertEqual(result['output'], "2\n")

    def test_shadow_outer(self):
        result = run("""
var a = "outer";
{
    var a = "inner";
    print a;
}
print a;
""")
        self.assertEqual(result['output'], "inner\nouter\n")

    def test_return_in_initializer(self):
        result = run("class A { init() { return; } }\nprint A();")
        self.assertEqual(result['output'], "A instance\n")


class ResolverDepthTestCase(unittest.TestCase):
    def setUp(self):
        from lox import parser, scanner
        from lox.resolver import Resolver
        tokens, _, _ = scanner.scan("""
var g = 0;
fun outer(a) {
    {
        var b = a;
        print b + g;
    }
}
""")
        self.statements, _ = parser.parse(tokens)
        self.locals = {}
        self.errors = Resolver(self.locals, self.statements).inspect()

    def test_depths(self):
        self.assertEqual(self.errors, [])
        block = self.statements[1].stmts[0]
        varB, printStmt = block.stmts
        # a is a parameter, one scope out from the block
        self.assertEqual(self.locals[varB.initializer], 1)
        # b is in the innermost scope
        self.assertEqual(self.locals[printStmt.expr.left], 0)
        # globals are not recorded
        self.assertNotIn(printStmt.expr.right, self.locals)
        self.assertEqual(len(self.locals), 2)
