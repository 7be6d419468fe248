from dupcrawl.core.models import SortOrder, DigestAlgorithm

SORT_ALIASES = {
    "size": SortOrder.SIZE,
    "path": SortOrder.LEXICOGRAPHIC,
    "name": SortOrder.LEXICOGRAPHIC,
}

SORT_CHOICES = list(SORT_ALIASES.keys())

SORT_HELP_TEXT = (
    "Order of duplicate groups:\n"
    "  size : smallest files first (default)\n"
    "  path : alphabetical by first path in the group\n"
    "Paths inside a group are always sorted alphabetically.\n"
)

ALGORITHM_ALIASES = {
    "md5": DigestAlgorithm.MD5,
    "xxh128": DigestAlgorithm.XXH128,
    "xxhash": DigestAlgorithm.XXH128,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Hash primitive used for file digests (both 16 bytes, not for security):\n"
    "  md5    : MD5 (default)\n"
    "  xxh128 : xxHash3 128-bit (faster)\n"
)

SAMPLING_HELP_TEXT = (
    "Files larger than this are sampled instead of fully read (default: 100M).\n"
    "Sampled digests may report files as duplicates that differ outside the samples.\n"
    "Set it above your largest file to always hash full content."
)

EPILOG_TEXT = """
Examples:
  Find duplicates in Downloads folder
  %(prog)s -i ~/Downloads

  Only look at the top two directory levels, list groups alphabetically
  %(prog)s -i ~/Downloads -d 2 --sort path

  Exact comparison of every file (no sampling), 8 files at a time
  %(prog)s -i /srv/media -t 1P -j 8

  Follow symbolic links and write the report to a file
  %(prog)s -i ~/Music -L > ~/Music/duplicates.txt
"""
