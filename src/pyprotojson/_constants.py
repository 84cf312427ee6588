"""Resource limit and range constants for protobuf/JSON conversion."""

DEFAULT_MAX_DEPTH = 64
"""Maximum JSON nesting depth for reading and writing."""

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1
