import os

SYSNAME = "mishell"

# Executables are looked up only here, no PATH search.
BIN_DIR = os.environ.get("MISHELL_BIN_DIR", "/bin")

HISTORY_FILE = os.path.expanduser(os.environ.get("MISHELL_HISTORY", "~/.mishell_history"))
MAX_HISTORY = 1000

SUDO = "/bin/sudo"
PSVIS_MODULE = os.environ.get("MISHELL_PSVIS_MODULE", "module/mymodule.ko")
