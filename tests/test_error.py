import unittest

import lox
from tests import capture

TESTCODE = """
print "before";
var = 1;
print (1 + ;
print "after";
var ok = 2 @;
"""

class SyntaxErrorTestCase(unittest.TestCase):
    def setUp(self):
        interpreter = lox.Lox()
        captureOutput, returnOutput = capture('output')
        captureError, returnErrors = capture('error')
        interpreter.registerHandlers(
            output=captureOutput,
            error=captureError,
        )
        self.result = interpreter.run(TESTCODE)
        self.result['output'] = returnOutput()
        self.result['report'] = returnErrors()
        
    def test_error(self):
        # All errors should be collected, in order
        errors = self.result['errors']
        self.assertEqual(len(errors), 3)
        for error in errors:
            self.assertTrue(
                issubclass(
                    type(error),
                    lox.builtin.LoxError,
                )
            )
            self.assertIs(
                type(error),
                lox.builtin.ParseError,
            )

    def test_report(self):
        # Scanner errors are reported before parser errors
        self.assertEqual(
            self.result['report'],
            "[line 6] Error: Unexpected character.\n"
            "[line 3] Error at '=': Expect variable name.\n"
            "[line 4] Error at ';': Expect expression.\n",
        )

    def test_no_output(self):
        # Syntax errors prevent the program from running
        self.assertEqual(self.result['output'], '')
