import logging

from mishell.command import ARGS_END, Command, Redirect

logger = logging.getLogger(__name__)

QUOTES = ("'", '"')


def parse_command(line):
    """
    Parse one input line into a chain of Command stages.
    Never fails: a blank or malformed line gives an empty or partial Command.
    Returns: head Command of the pipeline
    """
    line = line.strip()

    auto_complete = background = False
    if line.endswith("?"):
        auto_complete = True
        line = line[:-1]
    elif line.endswith("&"):
        background = True
        line = line[:-1]

    command = parse_tokens(line.split())

    # Trailing ? and & describe the whole line, not the last stage.
    for stage in command.stages():
        stage.background = background
        stage.auto_complete = auto_complete
    return command


def parse_tokens(tokens):
    """
    Build a stage from whitespace-split tokens, recursing at the first `|`.
    Returns: Command
    """
    command = Command(name=tokens[0] if tokens else "")
    args = []

    for i in range(1, len(tokens)):
        tok = tokens[i]

        if tok == "|":
            command.next = parse_tokens(tokens[i + 1:])
            break

        # handled by parse_command
        if tok == "&":
            continue

        if tok.startswith("<"):
            set_redirect(command, Redirect.IN, tok[1:])
        elif tok.startswith(">>"):
            set_redirect(command, Redirect.APPEND, tok[2:])
        elif tok.startswith(">"):
            set_redirect(command, Redirect.OUT, tok[1:])
        else:
            args.append(unquote(tok))

    command.args = [command.name] + args + [ARGS_END]
    return command


def set_redirect(command, slot, path):
    if command.redirects[slot] is not None:
        logger.debug("%s redirect %r replaced by %r", slot.name, command.redirects[slot], path)
    command.redirects[slot] = path


def unquote(tok):
    """Strip one layer of matching quotes. Quotes never span whitespace."""
    if len(tok) > 2 and tok[0] in QUOTES and tok[-1] == tok[0]:
        return tok[1:-1]
    return tok
