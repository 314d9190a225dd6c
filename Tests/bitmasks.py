"""
Reference bitmask texts shared by the test suite.
"""

# BigTestPermissions ordinals 0, 23, 123, 555, 1023, 2325 and 2499
BIG_TEST_BITMASK = (
    "g0000000000000000000000000000000001000000000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "0008000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000"
    "0010000000000000000000000000000000000000000000000000000000000000000000000000000000000000080000"
    "00000000000000080001"
)

# TestPermissions CREATE_PERMISSION, DELETE_PERMISSION and PERMISSION_1023
TEST_BITMASK = "p"

# SmallTestPermissions, 128 values
SMALL_TEST_BITMASK = "4000000000000g000040000201"
SERIALIZED_SMALL_TEST_BIT_PERMISSION = '{"SmallTestPermissions@128":"4000000000000g000040000201"}'
