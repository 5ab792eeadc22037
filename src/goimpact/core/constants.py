"""Constants and default values for goimpact."""

# File names
CONFIG_FILE = ".goimpact.yaml"
MANIFEST_FILE = "go.mod"
LOCK_FILE = "go.sum"

# Manifest keyword that declares the module namespace
MODULE_KEYWORD = "module"

# Number of whitespace-separated fields in a well-formed lock line
LOCK_LINE_FIELDS = 3

# Source files that take part in the import graph
SOURCE_EXTENSIONS = [".go"]

# Comment directives that restrict a file to some platforms/build tags
CONSTRAINT_DIRECTIVES = [
    "//go:build",
    "// +build",
]

# Policies for abbreviated hashes that match more than one commit
AMBIGUOUS_PREFIX_ERROR = "error"
AMBIGUOUS_PREFIX_FIRST = "first"

# URL scheme that marks a local repository
FILE_SCHEME = "file://"

# Environment variables for credentials
ENV_USER = "GOIMPACT_USER"
ENV_PASSWORD = "GOIMPACT_PASSWORD"
ENV_TOKEN = "GOIMPACT_TOKEN"

# Indentation used for explanation lines in text reports
EXPLAIN_INDENT = "    "
