import pytest

from mishell.command import ARGS_END, Redirect
from mishell.parser import parse_command, unquote


@pytest.mark.parametrize(
    "line,expected",
    [
        ("ls", ["ls"]),
        ("ls -l -a", ["ls", "-l", "-a"]),
        ("  echo   hello\tworld  ", ["echo", "hello", "world"]),
        ('echo "hello"', ["echo", "hello"]),
        ("echo 'hi'", ["echo", "hi"]),
        ("grep 'x' \"y\" z", ["grep", "x", "y", "z"]),
    ],
)
def test_args_are_split_tokens_without_quotes(line, expected):
    command = parse_command(line)
    assert command.name == expected[0]
    assert command.argv == expected
    assert command.args[-1] is ARGS_END
    assert command.next is None


def test_args_keep_calling_convention():
    command = parse_command("cat a b")
    assert command.args == ["cat", "a", "b", ARGS_END]
    assert command.args[0] == command.name


@pytest.mark.parametrize(
    "tok,expected",
    [
        ('"abc"', "abc"),
        ("'abc'", "abc"),
        ('""', '""'),
        ("''", "''"),
        ('"a"', "a"),
        ("'abc\"", "'abc\""),
        ('"abc', '"abc'),
        ("plain", "plain"),
    ],
)
def test_unquote(tok, expected):
    assert unquote(tok) == expected


def test_quotes_with_whitespace_are_not_joined():
    # Known limitation: tokens split before quotes are looked at.
    command = parse_command('echo "hello world"')
    assert command.argv == ["echo", '"hello', 'world"']


def test_blank_line_gives_empty_command():
    command = parse_command("   \t ")
    assert command.name == ""
    assert command.args == ["", ARGS_END]
    assert not command.background
    assert not command.auto_complete


def test_redirects():
    command = parse_command("sort <in.txt >out.txt")
    assert command.argv == ["sort"]
    assert command.redirects[Redirect.IN] == "in.txt"
    assert command.redirects[Redirect.OUT] == "out.txt"
    assert command.redirects[Redirect.APPEND] is None


def test_append_redirect():
    command = parse_command("echo hi >>log.txt")
    assert command.argv == ["echo", "hi"]
    assert command.redirects[Redirect.APPEND] == "log.txt"
    assert command.redirects[Redirect.OUT] is None


def test_redirect_marker_alone_gives_empty_path():
    # Accepted: the path must be attached to the marker.
    command = parse_command("cat < file")
    assert command.redirects[Redirect.IN] == ""
    assert command.argv == ["cat", "file"]


def test_repeated_redirect_keeps_last():
    command = parse_command("echo x >a >b")
    assert command.redirects[Redirect.OUT] == "b"


def test_background_flag_is_dropped_from_tokens():
    command = parse_command("sleep 10 &")
    assert command.background
    assert command.argv == ["sleep", "10"]

    glued = parse_command("sleep 10&")
    assert glued.background
    assert glued.argv == ["sleep", "10"]


def test_auto_complete_flag():
    command = parse_command("ec?")
    assert command.auto_complete
    assert not command.background
    assert command.name == "ec"


def test_lone_ampersand_token_is_discarded():
    command = parse_command("echo a & b")
    assert command.argv == ["echo", "a", "b"]
    assert not command.background


def test_pipeline_chain():
    command = parse_command("cat <in.txt | sort -r | head -n 1 >out.txt")
    stages = command.stages()
    assert [s.argv for s in stages] == [["cat"], ["sort", "-r"], ["head", "-n", "1"]]
    assert stages[0].redirects[Redirect.IN] == "in.txt"
    assert stages[2].redirects[Redirect.OUT] == "out.txt"
    assert stages[0].next is stages[1]
    assert stages[2].next is None


def test_flags_apply_to_whole_line():
    command = parse_command("yes | head -n 1 &")
    assert [s.background for s in command.stages()] == [True, True]


def test_trailing_pipe_gives_empty_stage():
    # Malformed lines are tolerated, never an error.
    command = parse_command("ls |")
    stages = command.stages()
    assert len(stages) == 2
    assert stages[1].name == ""


def test_str_round_trips_the_line():
    line = "cat <in | sort >>out &"
    assert str(parse_command(line)) == line


def test_describe_lists_the_chain():
    text = parse_command("ls -l | wc").describe()
    assert "Command: <ls>" in text
    assert "Arg 1: -l" in text
    assert "Piped to:" in text
    assert "Command: <wc>" in text
