"""Process exit codes for the s3conn CLI."""

OK = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
STORAGE_ERROR = 3
NOT_FOUND = 4
