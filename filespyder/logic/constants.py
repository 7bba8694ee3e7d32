import os
import sys

IS_WINDOWS = sys.platform == "win32"

WIN_SEP = "\\"
UNC_MARKER = "\\\\"
UNC_PREFIX = "\\\\?\\UNC\\"
FS_PREFIX = "\\\\?\\"
WILDCARD = "*"

SEP = os.sep
SELF_AND_PARENT = (".", "..")

SCHEME_FILE = "file"

# the traditional MAX_PATH on windows
MAX_PATH = 260
