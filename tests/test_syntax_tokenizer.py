import textwrap

import pytest

from MarkdownCore.syntax_languages import GENERIC, Language, language_for, supported_languages
from MarkdownCore.syntax_tokenizer import tokenize
from MarkdownCore.syntax_tokens import SyntaxToken, TokenKind

SAMPLES = {
    "swift": """
        import Foundation

        /* A person */
        struct Person {
            let name: String
            var age: Int = 0x1F
            func greet() -> String { return "Hi, \\(name)!" } // say hello
        }
        """,
    "typescript": """
        const greet = async (name: string): Promise<void> => {
          console.log(`Hello ${name}`, 'x', 1e3 ?? 0);
        };
        """,
    "python": '''
        @decorator
        def main(argv=None):
            """Entry point."""
            return [x ** 2 for x in range(10) if x is not None]  # squares
        ''',
    "go": """
        package main

        func main() {
            msg := `raw`
            fmt.Println("hi", msg, 3.5)
        }
        """,
    "rust": """
        fn longest<'a>(x: &'a str, y: &'a str) -> &'a str {
            let c = 'z'; // char
            if x.len() > y.len() { x } else { y }
        }
        """,
    "java": """
        public class Main {
            public static void main(String[] args) {
                long n = 10L; /* count */
                System.out.println("Hello" + 'c');
            }
        }
        """,
    "kotlin": '''
        data class User(val name: String)
        fun main() { val s = """raw""" ; println(s?.length ?: 0) }
        ''',
    "ruby": """
        class Greeter
          def greet(name)
            puts "Hello #{name}" # greet
            :ok if defined?(name)
          end
        end
        """,
    "shell": """
        #!/bin/bash
        # deploy
        for f in *.txt; do echo "$f" ${HOME} $1; done
        """,
    "sql": """
        -- users
        SELECT id, name FROM Users WHERE age > 21 AND name LIKE 'a%';
        """,
    "html": """
        <!DOCTYPE html>
        <!-- page -->
        <div class="box" data-id='7'>Hi &amp; bye</div>
        """,
    "css": """
        /* theme */
        .box, #main { color: #fff; margin: 10px 1.5em; width: 50% !important; }
        """,
    "json": """
        {"name": "app", "count": -2.5e3, "ok": true, "none": null}
        """,
    "yaml": """
        # config
        name: app
        enabled: yes
        items: [1, 2]
        """,
}


def _texts(tokens, kind):
    return [token.text for token in tokens if token.kind is kind]


def test_empty_input_yields_no_tokens():
    assert tokenize("", "swift") == []
    assert tokenize("") == []


@pytest.mark.parametrize("language", sorted(SAMPLES) + [None, "unknown"])
def test_tokens_reproduce_source(language):
    code = textwrap.dedent(SAMPLES.get(language, SAMPLES["swift"]))
    tokens = tokenize(code, language)
    assert "".join(token.text for token in tokens) == code
    assert all(token.text for token in tokens)


@pytest.mark.parametrize("language", supported_languages() + ["generic"])
@pytest.mark.parametrize("code", ['"', "'", "`", "/*", "<!--", "\\", "\n", "é€😀"])
def test_unterminated_or_odd_input_is_total(language, code):
    assert "".join(token.text for token in tokenize(code, language)) == code


def test_line_comment_wins_over_string():
    assert tokenize('// say "hi"', "swift") == [SyntaxToken('// say "hi"', TokenKind.COMMENT)]


def test_unmatched_characters_merge_into_one_plain_token():
    assert tokenize("@@@ ###", "json") == [SyntaxToken("@@@ ###", TokenKind.PLAIN)]


def test_adjacent_plain_tokens_never_remain():
    tokens = tokenize(textwrap.dedent(SAMPLES["python"]), "python")
    for left, right in zip(tokens, tokens[1:]):
        assert not (left.kind is TokenKind.PLAIN and right.kind is TokenKind.PLAIN)


def test_swift_keywords():
    tokens = tokenize("func let var if else guard return", "swift")
    assert _texts(tokens, TokenKind.KEYWORD) == ["func", "let", "var", "if", "else", "guard", "return"]


def test_keywords_match_whole_words_only():
    assert tokenize("main", "swift") == [SyntaxToken("main", TokenKind.PLAIN)]
    assert tokenize("print(x)", "python") == [
        SyntaxToken("print", TokenKind.PLAIN),
        SyntaxToken("(", TokenKind.PUNCTUATION),
        SyntaxToken("x", TokenKind.PLAIN),
        SyntaxToken(")", TokenKind.PUNCTUATION),
    ]


def test_swift_types_numbers_and_properties():
    tokens = tokenize("let n: Int = 0xFF + 3.14 + 1e10; user.name", "swift")
    assert _texts(tokens, TokenKind.TYPE) == ["Int"]
    assert _texts(tokens, TokenKind.NUMBER) == ["0xFF", "3.14", "1e10"]
    assert _texts(tokens, TokenKind.PROPERTY) == [".name"]


def test_multi_character_operators_before_punctuation():
    tokens = tokenize("a -> b == c", "swift")
    assert _texts(tokens, TokenKind.PUNCTUATION) == ["->", "=="]
    assert "..." in _texts(tokenize("f(...rest)", "ts"), TokenKind.PUNCTUATION)


def test_typescript_strings():
    tokens = tokenize("const a = `t ${x}`; let b = \"d\"; var c = 's';", "typescript")
    assert _texts(tokens, TokenKind.STRING) == ["`t ${x}`", '"d"', "'s'"]
    assert _texts(tokens, TokenKind.KEYWORD) == ["const", "let", "var"]


def test_python_triple_quoted_string_and_comment():
    tokens = tokenize('x = """doc\n# not a comment"""  # real', "python")
    assert _texts(tokens, TokenKind.STRING) == ['"""doc\n# not a comment"""']
    assert _texts(tokens, TokenKind.COMMENT) == ["# real"]


def test_go_raw_string_and_short_assignment():
    tokens = tokenize('msg := `raw "text"`', "go")
    assert _texts(tokens, TokenKind.STRING) == ['`raw "text"`']
    assert _texts(tokens, TokenKind.PUNCTUATION) == [":="]


def test_rust_lifetimes_are_not_char_literals():
    tokens = tokenize("fn f<'a>(x: &'a str) { let c = 'x'; }", "rust")
    assert _texts(tokens, TokenKind.TYPE) == ["'a", "'a"]
    assert _texts(tokens, TokenKind.STRING) == ["'x'"]


def test_java_numbers_with_suffix():
    tokens = tokenize("long n = 10L; float f = 2.5f;", "java")
    assert _texts(tokens, TokenKind.NUMBER) == ["10L", "2.5f"]
    assert _texts(tokens, TokenKind.KEYWORD) == ["long", "float"]


def test_kotlin_multiline_string():
    tokens = tokenize('val s = """a\n"b"\n"""', "kotlin")
    assert _texts(tokens, TokenKind.STRING) == ['"""a\n"b"\n"""']


def test_ruby_symbols_keywords_and_comments():
    tokens = tokenize('def greet\n  :ok # done\nend', "ruby")
    assert _texts(tokens, TokenKind.KEYWORD) == ["def", "end"]
    assert _texts(tokens, TokenKind.STRING) == [":ok"]
    assert _texts(tokens, TokenKind.COMMENT) == ["# done"]


def test_shell_comments_strings_and_variables():
    tokens = tokenize('#!/bin/bash\n# c\necho "$HOME" $USER ${PATH}', "bash")
    assert _texts(tokens, TokenKind.COMMENT) == ["#!/bin/bash", "# c"]
    assert _texts(tokens, TokenKind.STRING) == ['"$HOME"']
    assert _texts(tokens, TokenKind.PROPERTY) == ["$USER", "${PATH}"]


def test_sql_keywords_are_case_insensitive():
    tokens = tokenize("select * from users WHERE id = 1 -- done", "SQL")
    assert _texts(tokens, TokenKind.KEYWORD) == ["select", "from", "WHERE"]
    assert _texts(tokens, TokenKind.NUMBER) == ["1"]
    assert _texts(tokens, TokenKind.COMMENT) == ["-- done"]


def test_html_tag_and_attribute_names_are_positional():
    tokens = tokenize('<div class="box">div</div>', "html")
    assert _texts(tokens, TokenKind.KEYWORD) == ["div", "div"]
    assert _texts(tokens, TokenKind.PROPERTY) == ["class"]
    assert _texts(tokens, TokenKind.STRING) == ['"box"']
    assert SyntaxToken("div", TokenKind.PLAIN) in tokens


def test_html_comment_and_doctype():
    tokens = tokenize("<!doctype html><!-- <p> -->", "xml")
    assert _texts(tokens, TokenKind.KEYWORD) == ["<!doctype html>"]
    assert _texts(tokens, TokenKind.COMMENT) == ["<!-- <p> -->"]


def test_css_colors_and_units_are_numbers():
    tokens = tokenize(".box { color: #fff; margin: 10px 1.5em; width: 50%; }", "scss")
    assert _texts(tokens, TokenKind.NUMBER) == ["#fff", "10px", "1.5em", "50%"]
    assert _texts(tokens, TokenKind.TYPE) == [".box"]
    assert _texts(tokens, TokenKind.PROPERTY) == ["color", "margin", "width"]


def test_json_has_no_generic_heuristics():
    tokens = tokenize('{"a": [1, -2.5e3, true, null], "B": Value}', "json")
    assert _texts(tokens, TokenKind.STRING) == ['"a"', '"B"']
    assert _texts(tokens, TokenKind.NUMBER) == ["1", "-2.5e3"]
    assert _texts(tokens, TokenKind.KEYWORD) == ["true", "null"]
    assert _texts(tokens, TokenKind.TYPE) == []
    assert _texts(tokens, TokenKind.PROPERTY) == []


def test_yaml_keys_keywords_and_comments():
    tokens = tokenize("name: app # c\nenabled: yes\ncount: 3", "yml")
    assert _texts(tokens, TokenKind.PROPERTY) == ["name", "enabled", "count"]
    assert _texts(tokens, TokenKind.KEYWORD) == ["yes"]
    assert _texts(tokens, TokenKind.NUMBER) == ["3"]
    assert _texts(tokens, TokenKind.COMMENT) == ["# c"]


def test_unknown_language_uses_generic_table():
    code = "if (x) { return Foo; } // done"
    assert tokenize(code, "cobol") == tokenize(code, None)
    tokens = tokenize(code, "cobol")
    assert _texts(tokens, TokenKind.KEYWORD) == ["if", "return"]
    assert _texts(tokens, TokenKind.TYPE) == ["Foo"]
    assert _texts(tokens, TokenKind.COMMENT) == ["// done"]


@pytest.mark.parametrize(
    "alias, name",
    [
        ("swift", "swift"),
        ("typescript", "typescript"),
        ("ts", "typescript"),
        ("javascript", "typescript"),
        ("JS", "typescript"),
        ("jsx", "typescript"),
        ("tsx", "typescript"),
        ("python", "python"),
        ("Py", "python"),
        ("go", "go"),
        ("golang", "go"),
        ("rust", "rust"),
        ("rs", "rust"),
        ("java", "java"),
        ("kotlin", "kotlin"),
        ("kt", "kotlin"),
        ("ruby", "ruby"),
        ("rb", "ruby"),
        ("shell", "shell"),
        ("bash", "shell"),
        ("sh", "shell"),
        ("zsh", "shell"),
        ("sql", "sql"),
        ("html", "html"),
        ("htm", "html"),
        ("XML", "html"),
        ("css", "css"),
        ("scss", "css"),
        ("sass", "css"),
        ("less", "css"),
        ("json", "json"),
        ("yaml", "yaml"),
        ("yml", "yaml"),
    ],
)
def test_language_aliases(alias, name):
    assert language_for(alias).name == name


def test_language_fallback():
    assert language_for(None) is GENERIC
    assert language_for("") is GENERIC
    assert language_for("c++") is GENERIC
    assert len(supported_languages()) == 14


def test_custom_language_table():
    mini = Language("mini", ["mini"], [(TokenKind.KEYWORD, r"\babc\b")])
    tokens = tokenize("abc abcd", "MINI", languages={"mini": mini})
    assert tokens == [SyntaxToken("abc", TokenKind.KEYWORD), SyntaxToken(" abcd", TokenKind.PLAIN)]


def test_custom_language_table_with_mixed_case_keys():
    mini = Language("mini", ["Mini"], [(TokenKind.KEYWORD, r"\babc\b")])
    tokens = tokenize("abc", "mini", languages={"Mini": mini})
    assert tokens == [SyntaxToken("abc", TokenKind.KEYWORD)]
    assert language_for("MINI", {"Mini": mini}) is mini
    assert language_for("other", {"Mini": mini}) is GENERIC
