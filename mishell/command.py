from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

# Marks the end of Command.args, like the NULL that terminates an exec argv.
ARGS_END = None


class Status(IntEnum):
    """Result handed back to the driver loop."""
    SUCCESS = 0
    EXIT = 1
    UNKNOWN = 2
    NOT_FOUND = 3


class Redirect(IntEnum):
    IN = 0
    OUT = 1
    APPEND = 2


def empty_redirects():
    return {slot: None for slot in Redirect}


@dataclass
class Command:
    """One pipeline stage; `next` holds the rest of the pipeline."""
    name: str = ""
    args: list = field(default_factory=lambda: [ARGS_END])
    redirects: dict = field(default_factory=empty_redirects)
    background: bool = False
    auto_complete: bool = False
    next: Optional["Command"] = None

    @property
    def argv(self):
        """Arguments without the trailing ARGS_END."""
        return self.args[:-1]

    def stages(self):
        """
        Flatten the chain into a list, head first.
        Returns: list of Command
        """
        stages, cur = [], self
        while cur is not None:
            stages.append(cur)
            cur = cur.next
        return stages

    def describe(self):
        """Multi-line dump of the whole chain, for --debug."""
        lines = [
            f"Command: <{self.name}>",
            f"\tIs Background: {'yes' if self.background else 'no'}",
            f"\tNeeds Auto-complete: {'yes' if self.auto_complete else 'no'}",
            "\tRedirects:",
        ]
        for slot in Redirect:
            lines.append(f"\t\t{slot.name}: {self.redirects[slot] or 'N/A'}")
        lines.append(f"\tArguments ({len(self.args)}):")
        for i, arg in enumerate(self.args):
            lines.append(f"\t\tArg {i}: {arg}")
        if self.next is not None:
            lines.append("\tPiped to:")
            lines.append(self.next.describe())
        return "\n".join(lines)

    def _stage_text(self):
        parts = list(self.argv)
        if self.redirects[Redirect.IN] is not None:
            parts.append("<" + self.redirects[Redirect.IN])
        if self.redirects[Redirect.OUT] is not None:
            parts.append(">" + self.redirects[Redirect.OUT])
        if self.redirects[Redirect.APPEND] is not None:
            parts.append(">>" + self.redirects[Redirect.APPEND])
        return " ".join(parts)

    def __str__(self):
        line = " | ".join(stage._stage_text() for stage in self.stages())
        return line + " &" if self.background else line
