"""File utility builtins: hdiff, mkdir, rmdir, countlines, scoutword.

Each handler takes (command, session), checks its fixed argument count,
prints a usage line on mismatch and returns a Status.
"""
import os

from mishell.command import Status
from mishell.errors import reason


def execute_hdiff(command, session):
    """hdiff [-a | -b] file1 file2"""
    argv = command.argv
    if len(argv) != 4:
        print("Usage: hdiff [-a | -b] file1 file2")
        return Status.UNKNOWN

    mode, file1, file2 = argv[1:]
    if mode not in ("-a", "-b"):
        print("Error: Invalid mode")
        return Status.UNKNOWN

    try:
        if mode == "-a":
            compare_text_files(file1, file2)
        else:
            compare_binary_files(file1, file2)
    except (OSError, ValueError) as e:
        print(f"Error opening files: {getattr(e, 'filename', None) or file1}: {reason(e)}")
        return Status.UNKNOWN
    return Status.SUCCESS


def compare_text_files(file1, file2):
    """Compare line by line, stopping at the end of the shorter file."""
    diff_count = 0
    with open(file1, "r", errors="replace") as f1, open(file2, "r", errors="replace") as f2:
        for line_num, (line1, line2) in enumerate(zip(f1, f2)):
            if line1 != line2:
                print(f"{file1}:Line {line_num}: {line1}", end="" if line1.endswith("\n") else "\n")
                print(f"{file2}:Line {line_num}: {line2}", end="" if line2.endswith("\n") else "\n")
                diff_count += 1

    if diff_count == 0:
        print("The two files are identical.")
    else:
        print(f"{diff_count} different lines found.")
    return diff_count


def compare_binary_files(file1, file2):
    """Count differing bytes up to the length of the shorter file."""
    with open(file1, "rb") as f1, open(file2, "rb") as f2:
        data1, data2 = f1.read(), f2.read()

    diff_count = sum(1 for b1, b2 in zip(data1, data2) if b1 != b2)
    if diff_count > 0:
        print(f"{diff_count} bytes are different.")
    else:
        print("The two files are identical.")
    return diff_count


def mkdir_command(command, session):
    argv = command.argv
    if len(argv) != 2:
        print("Usage: mkdir <directory_name>")
        return Status.UNKNOWN

    try:
        os.mkdir(argv[1], 0o777)
    except (OSError, ValueError) as e:
        print(f"mkdir: {reason(e)}")
        return Status.UNKNOWN

    print(f"Directory '{argv[1]}' created successfully.")
    return Status.SUCCESS


def rmdir_command(command, session):
    argv = command.argv
    if len(argv) != 2:
        print("Usage: rmdir <directory_name>")
        return Status.UNKNOWN

    try:
        os.rmdir(argv[1])
    except (OSError, ValueError) as e:
        print(f"rmdir: {reason(e)}")
        return Status.UNKNOWN

    print(f"Directory '{argv[1]}' removed successfully.")
    return Status.SUCCESS


def execute_countlines(command, session):
    argv = command.argv
    if len(argv) != 2:
        print("Usage: countlines <file>")
        return Status.UNKNOWN

    try:
        with open(argv[1], "rb") as f:
            line_count = sum(1 for _ in f)
    except (OSError, ValueError) as e:
        print(f"Error opening file: {reason(e)}")
        return Status.UNKNOWN

    print(f"Number of lines in {argv[1]}: {line_count}")
    return Status.SUCCESS


def execute_scoutword(command, session):
    argv = command.argv
    if len(argv) != 3:
        print("Usage: scoutword <word> <file>")
        return Status.UNKNOWN

    word, path = argv[1], argv[2]
    try:
        with open(path, "r", errors="replace") as f:
            occurrences = sum(line.count(word) for line in f)
    except (OSError, ValueError) as e:
        print(f"Error opening file: {reason(e)}")
        return Status.UNKNOWN

    if occurrences > 0:
        print(f"Occurrences of '{word}' in {path}: {occurrences}")
    else:
        print(f"The file '{path}' does not contain the word '{word}'")
    return Status.SUCCESS
