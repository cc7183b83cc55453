#
# Handle encoding of phrases and dividing the content into
# blocks.
#

import logging

from . import galois
from . import qrtables

log = logging.getLogger(__name__)


class encode(object):
    """
    This class implements encoding of arbitrary byte phrases using
    the QR-code byte mode.
    """

    # Modes..
    QR_MODE_BYTE = 0b0100

    #
    def __init__(self,**kwargs):
        """
        **kwargs:
        ---------
        version : int
            QR-code version between 1 and 40.
        """
        self.mode = encode.QR_MODE_BYTE
        self.version = kwargs.get("version",1)

        if (self.version < 1 or self.version > qrtables.QR_MAX_VERSION):
            raise ValueError(f"Invalid QR-code version {self.version}")

        # character count indicator
        self.size_bits = 8 if self.version < 10 else 16

    #
    def encode_with_trailer_(self, bin_str : str, max_len : int) -> bytearray:
        """Internal method for adding trailing zeros and padding.

            Parameters:
            -----------
            bin_str : str
                Input phrase as a binary string.
            max_len : int
                Maximum length of the encoded phrase (in octets).

            Raises:
            -------
            CapacityError
                If the encoded phrase is longer than maximum codewords allowed by QR-code.

            Return:
            -------
                bytearray containing the encoded phrase.
        """
        if (len(bin_str) > max_len*8):
            raise qrtables.CapacityError("Phrase to be encoded is too long for QR-code version "
                                         f"{self.version} ({len(bin_str)} > {max_len*8} bits)")

        # terminating zeroes, up to 4 if they fit
        bin_str = bin_str + "0000"[0:max_len*8 - len(bin_str)]

        # align to 8 bits
        bin_str = bin_str + "00000000"[0:-len(bin_str) % 8]
        # convert to bytearray
        encoded = bytearray([int(bin_str[i:i+8],2) for i in range(0,len(bin_str),8)])

        pad = 0b11101100
        pos = len(encoded)

        while (pos < max_len):
            encoded.append(pad)
            # 0xec <-> 0x11
            pad = pad ^ 0b11111101
            pos += 1

        return encoded

    #
    def encode_preamble_(self, length : int) -> str:
        """Internal method for creating the preample with the mode and phrase length.

            Parameters:
            -----------
            length : int
                The length of the phrase to be encoded.

            Return:
            -------
                str containing the encoded mode and length in binary format.
        """
        if (length >= 1 << self.size_bits):
            raise qrtables.CapacityError(f"Phrase length {length} does not fit "
                                         f"{self.size_bits} bit character count")

        return f"{self.mode:04b}{length:0{self.size_bits}b}"

    #
    def encode_phrase(self, phrase, max_len : int) -> bytearray:
        """Encode a phrase in byte mode.

            Parameters:
            -----------
            phrase : bytes or str
                Input phrase to be encoded. A str is encoded as UTF-8.
            max_len : int
                The maximum length of the codewords for this QR-code.

            Return:
            -------
                bytearray containing the entire encoded phrase with preample, trailer and padding.
        """
        tmp = to_bytes(phrase)

        # Mode and phrase length
        bin_str = self.encode_preamble_(len(tmp))
        bin_str = bin_str + "".join(f"{byte:08b}" for byte in tmp)

        return self.encode_with_trailer_(bin_str,max_len)


def to_bytes(phrase) -> bytes:
    if (isinstance(phrase,str)):
        return phrase.encode("UTF-8")
    if (isinstance(phrase,(bytes,bytearray,memoryview))):
        return bytes(phrase)

    raise TypeError(f"Input phrase must be bytes or string got '{type(phrase)}'")


def split_blocks(data : bytes, vi : qrtables.versionInfo) -> list:
    # short blocks first, the remaining ones are one codeword longer
    short_len = vi.get_short_block_len()
    num_short = vi.blocks - vi.get_long_blocks()

    cwds = []
    pos = 0

    for n in range(vi.blocks):
        stp = short_len if n < num_short else short_len + 1
        cwds.append(bytearray(data[pos:pos+stp]))
        pos += stp

    return cwds


def calc_code_ecc_arrays(data : bytes, vi : qrtables.versionInfo):
    gen = galois.generator.build(vi.ecc_codewords)
    div = galois.polydiv()

    cwds = split_blocks(data,vi)
    ewds = [div.remainder(blk,gen) for blk in cwds]

    return cwds,ewds


def interleave(cwds : list, ewds : list) -> bytearray:
    dst = bytearray()

    # data
    for cols in range(max(len(blk) for blk in cwds)):
        for blk in cwds:
            if (cols < len(blk)):
                dst.append(blk[cols])

    # ecc
    for cols in range(max(len(blk) for blk in ewds)):
        for blk in ewds:
            if (cols < len(blk)):
                dst.append(blk[cols])

    return dst


def build_codewords(phrase, version : int) -> bytearray:
    """Build the final interleaved codeword stream of a phrase.

        Parameters:
        -----------
        phrase : bytes or str
            Input phrase to be encoded.
        version : int
            QR-code version between 1 and 40.

        Raises:
        -------
        CapacityError
            If the phrase does not fit into the version.

        Return:
        -------
            bytearray of data and ECC codewords in placement order.
    """
    vi = qrtables.get_version_info(version)
    pc = encode(version=version)
    ph = pc.encode_phrase(phrase,vi.get_data_codewords())

    dat,ecc = calc_code_ecc_arrays(ph,vi)

    if (log.isEnabledFor(logging.DEBUG)):
        log.debug("version %d, %d blocks, code words %s",version,vi.blocks,ph.hex(","))
        log.debug("ECC %s",",".join(blk.hex() for blk in ecc))

    return interleave(dat,ecc)
