from prpanel_core.utils.code import extension, filter_files, is_binary_file


def test_binary_files():
    assert is_binary_file("logo.png")
    assert is_binary_file("assets/Font.WOFF2")
    assert not is_binary_file("main.py")
    assert not is_binary_file("Makefile")


def test_extension():
    assert extension("src/app.test.ts") == ".ts"
    assert extension("src.d/Makefile") == ""
    assert extension(".gitignore") == ""


def test_filter_keeps_order_and_drops_binaries():
    files = ["b.py", "a.png", "a.py"]
    assert filter_files(files) == ["b.py", "a.py"]


def test_filter_by_extension():
    files = ["a.py", "b.ts", "c.js", "README"]
    assert filter_files(files, file_extensions=".py, .ts") == ["a.py", "b.ts"]


def test_filter_excludes_by_basename():
    files = ["src/setup.py", "setup.py", "src/app.py"]
    assert filter_files(files, file_excludes="setup.py") == ["src/app.py"]


def test_empty_filters_are_noops():
    assert filter_files(["a.py"], file_extensions="", file_excludes="") == ["a.py"]
