import unittest

from lox import scanner

class ScannerTestCase(unittest.TestCase):
    def setUp(self):
        src = 'var x = 1.5; // comment\nprint "hi" >= nil;'
        self.tokens, self.lines, self.errors = scanner.scan(src)

    def test_tokens(self):
        self.assertEqual(self.errors, [])
        self.assertEqual(
            [(token.type, token.word) for token in self.tokens],
            [
                ('keyword', 'var'),
                ('name', 'x'),
                ('symbol', '='),
                ('NUMBER', '1.5'),
                ('symbol', ';'),
                ('keyword', 'print'),
                ('STRING', '"hi"'),
                ('symbol', '>='),
                ('keyword', 'nil'),
                ('symbol', ';'),
                ('EOF', ''),
            ],
        )

    def test_values(self):
        self.assertEqual(self.tokens[3].value, 1.5)
        self.assertEqual(self.tokens[6].value, 'hi')
        self.assertIsNone(self.tokens[8].value)

    def test_positions(self):
        self.assertEqual(
            [token.line for token in self.tokens],
            [1, 1, 1, 1, 1, 2, 2, 2, 2, 2, 2],
        )
        self.assertEqual(self.tokens[1].column, 5)
        self.assertEqual(self.tokens[6].column, 7)

    def test_lines(self):
        self.assertEqual(
            self.lines, ['var x = 1.5; // comment', 'print "hi" >= nil;']
        )


class ScannerEdgeCaseTestCase(unittest.TestCase):
    def words(self, src):
        tokens, _, errors = scanner.scan(src)
        self.assertEqual(errors, [])
        return [token.word for token in tokens]

    def test_trailing_dot(self):
        self.assertEqual(self.words("1."), ['1', '.', ''])
        self.assertEqual(self.words(".5"), ['.', '5', ''])

    def test_identifiers(self):
        self.assertEqual(
            self.words("_under score9 orchid"),
            ['_under', 'score9', 'orchid', ''],
        )

    def test_values(self):
        tokens, _, _ = scanner.scan("true false")
        self.assertEqual([token.value for token in tokens[:2]], [True, False])

    def test_two_char_symbols(self):
        self.assertEqual(
            self.words("!= ! == = <= < >= >"),
            ['!=', '!', '==', '=', '<=', '<', '>=', '>', ''],
        )

    def test_division_and_comment(self):
        self.assertEqual(self.words("a / b // c / d"), ['a', '/', 'b', ''])

    def test_multiline_string(self):
        tokens, _, _ = scanner.scan('"a\nb" x')
        self.assertEqual(tokens[0].value, 'a\nb')
        self.assertEqual(tokens[1].line, 2)

    def test_empty(self):
        tokens, lines, errors = scanner.scan("")
        self.assertEqual([token.type for token in tokens], ['EOF'])
        self.assertEqual(errors, [])


class ScannerErrorTestCase(unittest.TestCase):
    def test_unexpected_character(self):
        tokens, _, errors = scanner.scan("a @ # b")
        self.assertEqual(
            [err.report() for err in errors],
            [
                "[line 1] Error: Unexpected character.",
                "[line 1] Error: Unexpected character.",
            ],
        )
        # Scanning continues past bad characters
        self.assertEqual([token.word for token in tokens], ['a', 'b', ''])

    def test_unterminated_string(self):
        tokens, _, errors = scanner.scan('print "never\nclosed')
        self.assertEqual(
            [err.report() for err in errors],
            ["[line 2] Error: Unterminated string."],
        )
        self.assertEqual([token.type for token in tokens], ['keyword', 'EOF'])
