from tree_sitter import Point

# Encoding passed to the engine when the caller doesn't pick one
ENC = "utf8"

# Characters, besides alphanumerics, that can be part of a name inside a query
IDENT_PUNCTUATION = "-_?."

# Points used when a query runs over the whole node
MIN_POINT = Point(0, 0)
MAX_POINT = Point(0xFFFFFFFF, 0xFFFFFFFF)
