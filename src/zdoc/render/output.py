"""Output stream shared by every file of a run."""

from typing import TextIO


class DocWriter:
    """Writes rendered entries, one blank line between consecutive entries.

    The separator flag lives here rather than per file, so entries from
    different files are separated the same way as entries within a file.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.emitted = False
        self.entries = 0

    def write_entry(self, lines: list[str]):
        if not lines:
            return
        if self.emitted:
            self.stream.write("\n")
        for line in lines:
            self.stream.write(line.rstrip() + "\n")
        self.emitted = True
        self.entries += 1
