import contextlib
import io
import unittest
from unittest import mock

import lox
from tests import run

class SessionTestCase(unittest.TestCase):
    """A Lox instance keeps its globals across runs."""
    def setUp(self):
        self.session = lox.Lox()

    def test_globals_persist(self):
        run("var a = 1;", self.session)
        run("fun f() { return a + 1; }", self.session)
        result = run("print f();", self.session)
        self.assertEqual(result['output'], "2\n")

    def test_closures_persist(self):
        run("var getter;", self.session)
        run("{ var b = 2; fun g() { return b; } getter = g; }", self.session)
        result = run("print getter();", self.session)
        self.assertEqual(result['output'], "2\n")

    def test_continues_after_error(self):
        result = run("print missing;", self.session)
        self.assertEqual(len(result['errors']), 1)
        result = run("print 1;", self.session)
        self.assertEqual(result['errors'], [])
        self.assertEqual(result['output'], "1\n")

    def test_errors_per_run(self):
        run("print (;", self.session)
        result = run('print "ok";', self.session)
        self.assertEqual(result['errors'], [])


class ReplTestCase(unittest.TestCase):
    def test_repl(self):
        stdout, stderr = io.StringIO(), io.StringIO()
        lines = ['var x = 2;', 'print x * 3;', 'print y;', 'print x;']
        with mock.patch('builtins.input', side_effect=lines + [EOFError]), \
                contextlib.redirect_stdout(stdout), \
                contextlib.redirect_stderr(stderr):
            lox.repl(lox.Lox())
        self.assertEqual(stdout.getvalue(), f"{lox.VERSION}\n6\n2\n\n")
        self.assertEqual(
            stderr.getvalue(), "Undefined variable 'y'.\n[line 1]\n"
        )


class HandlerTestCase(unittest.TestCase):
    def test_invalid_handler(self):
        with self.assertRaises(KeyError):
            lox.Lox().registerHandlers(input=print)
