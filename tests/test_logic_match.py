from filespyder.logic.match import compile_pattern, match_name, translate


def test_match_star():
    assert match_name("a.txt", "*.txt")
    assert match_name(".txt", "*.txt")
    assert not match_name("a.txt.bak", "*.txt")
    assert not match_name("atxt", "*.txt")
    assert not match_name("report.txtx", "*.txt")
    assert match_name("anything", "*")
    assert match_name("", "*")


def test_match_question_mark():
    assert match_name("abc", "a?c")
    assert not match_name("ac", "a?c")
    assert not match_name("abbc", "a?c")
    assert match_name("a.c", "a?c")


def test_match_case_insensitive():
    assert match_name("readme.TXT", "*.txt")
    assert match_name("README.txt", "readme.*")
    assert match_name("Test.Json", "TEST.JSON")


def test_match_full_name():
    assert not match_name("my-test.json", "test.json")
    assert not match_name("test.json.bak", "test.json")
    assert match_name("test.json", "test.json")


def test_match_literal_chars():
    # no character classes, no regex
    assert match_name("[a].txt", "[a].txt")
    assert not match_name("a.txt", "[a].txt")
    assert match_name("a+b.txt", "a+b.txt")
    assert not match_name("aab.txt", "a+b.txt")
    assert match_name("x(1).log", "x(?).log")
    assert not match_name("axtxt", "a.txt")


def test_match_star_dot_star():
    assert match_name("Makefile", "*.*")
    assert match_name("a.txt", "*.*")


def test_match_multiple_specs():
    assert match_name("a.txt", "*.json;*.txt")
    assert match_name("a.json", "*.json; *.txt")
    assert not match_name("a.csv", "*.json;*.txt")
    assert match_name("a.csv", ["*.json", "*.csv"])
    assert match_name("a.csv", ("*.json", "*.txt;*.csv"))


def test_match_empty_pattern():
    assert not match_name("a.txt", "")
    assert not match_name("", "")
    assert not match_name("a.txt", ";")
    assert compile_pattern("") is None


def test_match_translate():
    assert translate("*.txt") == ".*\\.txt"
    assert translate("a**b") == "a.*b"
    assert translate("a?c") == "a.c"
