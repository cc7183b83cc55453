#
# QR-code version tables for byte mode and ECC level M.
#
# Contributed by https://www.thonky.com/qr-code-tutorial/error-correction-table
# and https://www.thonky.com/qr-code-tutorial/character-capacities
#

QR_MAX_VERSION = 40


class CapacityError(ValueError):
    """The payload does not fit into the requested (or any) QR-code version."""


# Byte mode capacity (ECC level M) per version, index 0 unused
capacity_tab_ = (
    0,
    14,   26,   42,   62,   84,  106,  122,  152,  180,  213,   # 1-10
    251,  287,  331,  362,  412,  450,  504,  560,  624,  666,   # 11-20
    711,  779,  857,  911,  997, 1059, 1125, 1190, 1264, 1370,   # 21-30
    1452, 1538, 1628, 1722, 1809, 1911, 1989, 2099, 2213, 2331)  # 31-40

# Total number of codewords (data + ECC) per version
total_codewords_tab_ = (
    0,
    26,   44,   70,  100,  134,  172,  196,  242,  292,  346,
    404,  466,  532,  581,  655,  733,  815,  901,  991, 1085,
    1156, 1258, 1364, 1474, 1588, 1706, 1828, 1921, 2051, 2185,
    2323, 2465, 2611, 2761, 2876, 3034, 3196, 3362, 3532, 3706)

# ECC codewords per block (level M)
ecc_codewords_tab_ = (
    0,
    10, 16, 26, 18, 24, 16, 18, 22, 22, 26,
    30, 22, 22, 24, 24, 28, 28, 26, 26, 26,
    26, 28, 28, 28, 28, 28, 28, 28, 28, 28,
    28, 28, 28, 28, 28, 28, 28, 28, 28, 28)

# Number of blocks (level M)
blocks_tab_ = (
    0,
    1,  1,  1,  2,  2,  4,  4,  4,  5,  5,
    5,  8,  9,  9, 10, 10, 11, 13, 14, 16,
    17, 17, 18, 20, 21, 23, 25, 26, 28, 29,
    31, 33, 35, 37, 38, 40, 43, 45, 47, 49)

# number of remainder bits left over after the codewords
remainder_bits_tab_ = (
    0,0,7,7,7,7,7,0,0,0,0,0,0,0,3,3,3,3,3,3,3,4,4,
    4,4,4,4,4,3,3,3,3,3,3,3,0,0,0,0,0,0)

# Alignment pattern centre rows/columns, starting from version 2
alignment_loc_ = (
    (6, 18),  #2
    (6, 22),
    (6, 26),
    (6, 30),
    (6, 34),
    (6, 22, 38),  #7
    (6, 24, 42),
    (6, 26, 46),
    (6, 28, 50),
    (6, 30, 54),
    (6, 32, 58),
    (6, 34, 62),
    (6, 26, 46, 66),  #14
    (6, 26, 48, 70),
    (6, 26, 50, 74),
    (6, 30, 54, 78),
    (6, 30, 56, 82),
    (6, 30, 58, 86),
    (6, 34, 62, 90),
    (6, 28, 50, 72, 94),  #21
    (6, 26, 50, 74, 98),
    (6, 30, 54, 78, 102),
    (6, 28, 54, 80, 106),
    (6, 32, 58, 84, 110),
    (6, 30, 58, 86, 114),
    (6, 34, 62, 90, 118),
    (6, 26, 50, 74, 98, 122),  #28
    (6, 30, 54, 78, 102, 126),
    (6, 26, 52, 78, 104, 130),
    (6, 30, 56, 82, 108, 134),
    (6, 34, 60, 86, 112, 138),
    (6, 30, 58, 86, 114, 142),
    (6, 34, 62, 90, 118, 146),
    (6, 30, 54, 78, 102, 126, 150),  #35
    (6, 24, 50, 76, 102, 128, 154),
    (6, 28, 54, 80, 106, 132, 158),
    (6, 32, 58, 84, 110, 136, 162),
    (6, 26, 54, 82, 110, 138, 166),
    (6, 30, 58, 86, 114, 142, 170))  #40

# Format information for ECC level M (0b00), masks 0 to 7
format_tab_ = (0x5412, 0x5125, 0x5e7c, 0x5b4b, 0x45f9, 0x40ce, 0x4f97, 0x4aa0)

FORMAT_GENERATOR = 0x537
FORMAT_XOR_MASK = 0x5412
VERSION_GENERATOR = 0x1f25


# Internal class for grouping QR-code encoding information.
class versionInfo(object):
    def __init__(self, ver):
        self.version = ver
        self.capacity = capacity_tab_[ver]
        self.total_codewords = total_codewords_tab_[ver]
        self.ecc_codewords = ecc_codewords_tab_[ver]
        self.blocks = blocks_tab_[ver]
        self.remainder_bits = remainder_bits_tab_[ver]

    def get_dimension(self):
        return self.version * 4 + 17

    def get_data_codewords(self):
        return self.total_codewords - self.ecc_codewords * self.blocks

    def get_short_block_len(self):
        return self.get_data_codewords() // self.blocks

    def get_long_blocks(self):
        # long blocks are one codeword longer and come last
        return self.get_data_codewords() % self.blocks

    def get_alignment_loc(self):
        if (self.version < 2):
            return ()

        return alignment_loc_[self.version-2]


def get_version_info(version : int) -> versionInfo:
    if (version < 1 or version > QR_MAX_VERSION):
        raise ValueError(f"Version can be between 1 to {QR_MAX_VERSION}, got {version}")

    return versionInfo(version)


def find_version(length : int) -> int:
    # brute force search.. the table is short
    for ver in range(1,QR_MAX_VERSION+1):
        if (capacity_tab_[ver] >= length):
            return ver

    raise CapacityError(f"Payload of {length} bytes exceeds the maximum "
                        f"capacity of {capacity_tab_[QR_MAX_VERSION]} bytes")


def calc_version_bits(version : int) -> int:
    # BCH(18,6): 6 bits of version followed by 12 bits of remainder
    data = version << 12
    rem = data

    for i in range(5,-1,-1):
        if (rem & (1 << (i + 12))):
            rem ^= VERSION_GENERATOR << i

    return data | rem


def calc_format_bits(mask : int) -> int:
    # BCH(15,5) over ECC level M (0b00) and the mask id
    data = mask
    rem = data << 10

    for i in range(4,-1,-1):
        if (rem & (1 << (i + 10))):
            rem ^= FORMAT_GENERATOR << i

    return ((data << 10) | rem) ^ FORMAT_XOR_MASK
