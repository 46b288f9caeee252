import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

import egg
from egg.lang.error import EggIOError, EggReferenceError, EggSyntaxError, ErrorHandler
from egg.lang.session import Session
from egg.pure.lexical import Apply, Literal, VariableRef


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.printed = []
        self.sess = Session(self.printed.append)

    def test_run(self):
        cases = {
            ("+(1, 2)",): 3,
            ("do(define(x, 10), +(x, 5))",): 15,
            ("if(false, 1, 2)",): 2,
            ("fun(a, b, +(a, b))(3, 4)",): 7,
            ("do(define(x, 4),", "   *(x, x))"): 16,
        }
        for fragments, expected in cases.items():
            self.assertEqual(expected, self.sess.run(*fragments), fragments)

    def test_run_errors(self):
        cases = {
            "foo": "ReferenceError: Undefined variable: foo",
            "+(1, 2": "SyntaxError: Expected ',' or ')'",
            "1(2)": "TypeError: Applying a non-function.",
            "if(1)": "SyntaxError: Bad number of args to if",
            "fun(x, x)()": "TypeError: Wrong number of arguments. Expected 1 got 0",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.sess.run(case), case)

    def test_fragments_joined_with_newline(self):
        self.assertEqual("do(1,\n2)", Session.join(["do(1,", "2)"]))
        self.assertEqual("SyntaxError: Unexpected text after program", self.sess.run("1", "2"))

    def test_runs_are_independent(self):
        self.assertEqual(1, self.sess.run("define(x, 1)"))
        self.assertIn("Undefined variable: x", self.sess.run("x"))
        self.assertNotIn("x", self.sess.global_env)

    def test_print(self):
        self.assertEqual(3, self.sess.run('do(print("a"), print(3))'))
        self.assertEqual(["a", 3], self.printed)

    def test_evaluate_raises(self):
        self.assertRaises(EggReferenceError, self.sess.evaluate, "foo")
        self.assertRaises(EggSyntaxError, self.sess.evaluate, "+(1, 2")

    def test_persistent_scope(self):
        self.sess.evaluate("define(sq, fun(x, *(x, x)))", env=self.sess.scope)
        self.assertEqual(49, self.sess.evaluate("sq(7)", env=self.sess.scope))
        self.assertIs(self.sess.global_env, self.sess.scope.parent)

    def test_parse(self):
        expected = Apply(VariableRef("+"), [Literal(1), VariableRef("x")])
        self.assertEqual(expected, self.sess.parse("+(1,", "x)"))
        self.assertEqual("+(1,\nx)", self.sess.last_source)

    def test_error_handler_registration(self):
        handler = ErrorHandler(fatal=False)
        sess = Session(error_handler=handler)

        sess.evaluate("1", path="a.egg")
        self.assertIsNone(handler.source)

        self.assertRaises(EggReferenceError, sess.evaluate, "y", path="b.egg")
        self.assertEqual(("b.egg", "y"), (handler.path, handler.source))

    def test_read(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "prog.egg")
            with open(path, "w") as file:
                file.write("do(define(x, 2),\n   +(x, 3))\n")

            self.assertEqual(5, self.sess.evaluate(self.sess.read(path)))
            self.assertRaises(EggIOError, self.sess.read, os.path.join(directory, "missing.egg"))


class RunTestCase(unittest.TestCase):

    def test_run(self):
        self.assertEqual(3, egg.run("+(1, 2)"))
        self.assertEqual(15, egg.run("do(define(x, 10),", "+(x, 5))"))
        self.assertIn("Undefined variable: foo", egg.run("foo"))

    def test_output(self):
        printed = []
        self.assertEqual("hi", egg.run('print("hi")', output=printed.append))
        self.assertEqual(["hi"], printed)

    def test_huge_ints(self):
        program = """
            do(define(x, 1), define(i, 0),
               while(<(i, 15000), do(define(x, *(x, 2)), define(i, +(i, 1)))),
               print(x),
               1)
        """
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(1, egg.run(program))
        self.assertEqual(4516, len(out.getvalue().strip()))
        self.assertTrue(out.getvalue().strip().isdigit())

    def test_run_owns_no_state(self):
        egg.run("define(leak, 1)")
        self.assertIn("ReferenceError", egg.run("leak"))


if __name__ == '__main__':
    unittest.main()
