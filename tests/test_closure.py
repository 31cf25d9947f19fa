import unittest

from tests import run

TESTCODE = """
fun makeCounter() {
    var count = 0;
    fun counter() {
        count = count + 1;
        return count;
    }
    return counter;
}

var counter = makeCounter();
print counter();
print counter();

var other = makeCounter();
print other();
print counter();

var getter;
var setter;
{
    var shared = "before";
    fun get() { return shared; }
    fun set(value) { shared = value; }
    getter = get;
    setter = set;
}
setter("after");
print getter();
print makeCounter;
"""

EXPECTED = "1\n2\n1\n3\nafter\n<fn makeCounter>\n"

class ClosureTestCase(unittest.TestCase):
    def setUp(self):
        self.result = run(TESTCODE)

    def test_closure(self):
        self.assertEqual(self.result['errors'], [])

    def test_output(self):
        # Closures capture their environment by reference
        self.assertEqual(self.result['output'], EXPECTED)
