import unittest

from epscript.lang.error import LexicalGap
from epscript.lang.lexical import KEYWORD, NAME, NUMBER, OPERATOR, PUNCT, STRING, WORD, Token, classify, tokenize


def texts(tokens):
    return [token.text for token in tokens]


class TokenizeTestCase(unittest.TestCase):

    def test_whitespace(self):
        cases = {
            "": [],
            "   \n\t ": [],
            " 3 ": ["3"],
            "\t4\n5\n": ["4", "5"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, texts(tokenize(case)), case)

    def test_statement(self):
        self.assertEqual(["let", "x", "=", "5", ";", "print", "x"], texts(tokenize("let x = 5 ; print x")))

    def test_adjoining_symbols_are_split(self):
        cases = {
            "let x=5": ["let", "x", "=", "5"],
            "x=5;print x": ["x", "=", "5", ";", "print", "x"],
            "+a b": ["+", "a", "b"],
            "(+ 1 2)": ["(", "+", "1", "2", ")"],
            "*+1 2 3": ["*", "+", "1", "2", "3"],
            "5x": ["5", "x"],
            "--1 2 3": ["-", "-", "1", "2", "3"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, texts(tokenize(case)), case)

    def test_kinds(self):
        tokens = tokenize("let x = \"hi there\" ; print + x 10")
        expected = [
            Token(KEYWORD, "let"), Token(NAME, "x"), Token(PUNCT, "="), Token(STRING, "\"hi there\""),
            Token(PUNCT, ";"), Token(KEYWORD, "print"), Token(OPERATOR, "+"), Token(NAME, "x"), Token(NUMBER, "10"),
        ]
        self.assertEqual(expected, tokens)

    def test_keywords_are_whole_words(self):
        cases = {
            "letter": [Token(NAME, "letter")],
            "printer": [Token(NAME, "printer")],
            "_let": [Token(NAME, "_let")],
            "print": [Token(KEYWORD, "print")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), case)

    def test_positions(self):
        tokens = tokenize("let  abc =\n  12")
        self.assertEqual([0, 5, 9, 13], [token.pos for token in tokens])
        self.assertEqual(8, tokens[1].end)

    def test_string_keeps_quotes_and_spaces(self):
        self.assertEqual(["\"a + b = c\"", "\"\""], texts(tokenize("\"a + b = c\" \"\"")))

    def test_gap_raises(self):
        should_raise = {"let x = 5 $": 10, "print #x": 6, "@@": 0, "print \"abc": 6, "x = 1 ? 2": 6}
        for case, pos in should_raise.items():
            with self.assertRaises(LexicalGap, msg=case) as cm:
                tokenize(case)
            self.assertEqual(pos, cm.exception.pos, case)

    def test_gap_spans_run(self):
        with self.assertRaises(LexicalGap) as cm:
            tokenize("print $%^ 1")
        self.assertEqual("$%^", cm.exception.expr)
        self.assertIn("unrecognized characters", str(cm.exception))

        with self.assertRaises(LexicalGap) as cm:
            tokenize("print \"abc")
        self.assertIn("unterminated string literal", str(cm.exception))

    def test_lenient_skips_gaps(self):
        gaps = []
        tokens = tokenize("print $ 1 @@ ; print 2", lenient=True, on_gap=gaps.append)

        self.assertEqual(["print", "1", ";", "print", "2"], texts(tokens))
        self.assertEqual(["$", "@@"], [gap.expr for gap in gaps])
        self.assertEqual([6, 10], [gap.pos for gap in gaps])

    def test_lenient_without_callback(self):
        self.assertEqual(["x"], texts(tokenize("~ x", lenient=True)))


class LegacyTokenizeTestCase(unittest.TestCase):

    def test_statement(self):
        self.assertEqual(["let", "x", "=", "5", ";", "print", "x"],
                         texts(tokenize("let x = 5 ; print x", legacy=True)))

    def test_adjoining_symbols_are_one_word(self):
        cases = {
            "let x=5": ["let", "x=5"],
            "+a b": ["+a", "b"],
            "(+ 1 2)": ["(+", "1", "2", ")"],
            "(+ a b)": ["(+", "a", "b)"],
            "x=5;print x": ["x=5;print", "x"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, texts(tokenize(case, legacy=True)), case)

    def test_keyword_prefix_is_split(self):
        self.assertEqual(["let", "ter"], texts(tokenize("letter", legacy=True)))
        self.assertEqual(["print", "er"], texts(tokenize("printer", legacy=True)))

    def test_digits_split_from_word(self):
        self.assertEqual(["12", "ab"], texts(tokenize("12ab", legacy=True)))

    def test_unmatched_characters_are_dropped(self):
        self.assertEqual(["print", "1"], texts(tokenize("print $ 1 @", legacy=True)))
        self.assertEqual(["print", "abc"], texts(tokenize("print \"abc", legacy=True)))

    def test_kinds(self):
        tokens = tokenize("let x=5 print \"s\" + ( =", legacy=True)
        self.assertEqual([KEYWORD, WORD, KEYWORD, STRING, OPERATOR, PUNCT, PUNCT], [token.kind for token in tokens])


class ClassifyTestCase(unittest.TestCase):

    def test_classify(self):
        cases = {
            "42": NUMBER, "\"s\"": STRING, "let": KEYWORD, "print": KEYWORD, "abc_1": NAME, "/": OPERATOR,
            ")": PUNCT, ";": PUNCT, "a+b": WORD, "\"": WORD, "1a": WORD,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, classify(case), case)


if __name__ == '__main__':
    unittest.main()
