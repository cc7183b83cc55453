#
# Build QR-Code module matrix in byte mode with ECC level M.
#

import logging

import numpy as np

from . import phrasecoder
from . import qrpenalty
from . import qrtables

log = logging.getLogger(__name__)


class encode(object):
    #
    QR_LIGHT = 0        # final module in white
    QR_DARK = 1         # final module in black
    QR_UNSET = 2        # temporary module not yet assigned

    #
    QR_MAX_VERSION = qrtables.QR_MAX_VERSION

    #
    QR_DIR_UP = 0
    QR_DIR_DOWN = 1

    # finder pattern
    finder_ =   np.array(
                [1,1,1,1,1,1,1,
                 1,0,0,0,0,0,1,
                 1,0,1,1,1,0,1,
                 1,0,1,1,1,0,1,
                 1,0,1,1,1,0,1,
                 1,0,0,0,0,0,1,
                 1,1,1,1,1,1,1],
                 np.uint8).reshape(7,7)

    # alignment pattern
    alignment_ =np.array(
                [1,1,1,1,1,
                 1,0,0,0,1,
                 1,0,1,0,1,
                 1,0,0,0,1,
                 1,1,1,1,1],np.uint8).reshape(5,5)

    @staticmethod
    def get_dimension_by_version(version:int)->int:
        return qrtables.get_version_info(version).get_dimension()

    #
    def set_function_(self, y : int, x : int, dark : bool):
        self.qr[y,x] = encode.QR_DARK if dark else encode.QR_LIGHT
        self.reserved[y,x] = True

    #
    def prep_finder_patterns(self):
        # also include separators around finder patterns.
        d = self.get_dimension()

        # upper left, lower left, upper right
        for y,x in ((0,0),(d-7,0),(0,d-7)):
            y0,y1 = max(y-1,0),min(y+8,d)
            x0,x1 = max(x-1,0),min(x+8,d)

            self.qr[y0:y1,x0:x1] = encode.QR_LIGHT
            self.qr[y:y+7,x:x+7] = encode.finder_
            self.reserved[y0:y1,x0:x1] = True

    #
    def prep_alignment_patterns(self):
        loc = self.vi.get_alignment_loc()

        # every row/column combination that does not hit a finder pattern
        for cy in loc:
            for cx in loc:
                yp,xp = cy - 2,cx - 2

                if (self.reserved[yp:yp+5,xp:xp+5].any()):
                    continue

                self.qr[yp:yp+5,xp:xp+5] = encode.alignment_
                self.reserved[yp:yp+5,xp:xp+5] = True

    #
    def prep_timing_patterns(self):
        d = self.get_dimension()

        # seventh row and column
        for n in range(d):
            if (not self.reserved[6,n]):
                self.set_function_(6,n,n % 2 == 0)
            if (not self.reserved[n,6]):
                self.set_function_(n,6,n % 2 == 0)

    #
    def prep_dark_module(self):
        self.set_function_(4*self.vi.version+9,8,True)

    #
    def reserve_level_mask(self):
        d = self.get_dimension()

        # around upper left finder
        self.reserved[8,0:9] = True
        self.reserved[0:9,8] = True
        # below upper right and right of lower left finder
        self.reserved[8,d-8:d] = True
        self.reserved[d-8:d,8] = True

    #
    def reserve_version(self):
        d = self.get_dimension()

        # For QR code versions greater or equal to 7
        if (self.vi.version >= 7):
            self.reserved[0:6,d-11:d-8] = True
            self.reserved[d-11:d-8,0:6] = True

    # version information
    def insert_version(self):
        v = self.vi.version
        d = self.get_dimension()

        if (v < 7):
            return

        bits = qrtables.calc_version_bits(v)

        # bit 0 goes to the corner nearest to the finder pattern
        for i in range(18):
            pixel = encode.QR_DARK if (bits >> i) & 1 else encode.QR_LIGHT
            a = d - 11 + i % 3
            b = i // 3

            # upper right, transposed to lower left
            self.qr[b,a] = pixel
            self.qr[a,b] = pixel

    #
    def insert_level_mask(self, mask : int):
        fmt = qrtables.format_tab_[mask]
        d = self.get_dimension()

        def pixel(i):
            return encode.QR_DARK if (fmt >> i) & 1 else encode.QR_LIGHT

        # vertical part next to upper left finder, skipping the timing row
        for n in range(6):
            self.qr[n,8] = pixel(n)

        self.qr[7,8] = pixel(6)
        self.qr[8,8] = pixel(7)
        self.qr[8,7] = pixel(8)

        # horizontal part, most significant bit in column 0
        for n in range(9,15):
            self.qr[8,14-n] = pixel(n)

        # second copy: below upper right finder..
        for n in range(8):
            self.qr[8,d-1-n] = pixel(n)

        # ..and right of lower left finder
        for n in range(8,15):
            self.qr[d-15+n,8] = pixel(n)

    #
    def zigzag_(self):
        # lower right corner as the starting pos
        d = self.get_dimension()
        x = d - 1
        updown = encode.QR_DIR_UP

        while (x >= 1):
            # skip vertical timing pattern
            if (x == 6):
                x = 5

            for n in range(d):
                y = d - 1 - n if updown == encode.QR_DIR_UP else n

                yield y,x
                yield y,x-1

            updown = encode.QR_DIR_DOWN if updown == encode.QR_DIR_UP else encode.QR_DIR_UP
            x -= 2

    #
    def encode_layout(self, codewords : bytes) -> int:
        bits = len(codewords) * 8
        n = 0

        for y,x in self.zigzag_():
            if (self.reserved[y,x]):
                continue

            if (n < bits):
                byte = codewords[n >> 3]
                self.qr[y,x] = encode.QR_DARK if (byte >> (7 - (n & 7))) & 1 else encode.QR_LIGHT
                n += 1
            else:
                # remainder bits
                self.qr[y,x] = encode.QR_LIGHT

        return n

    #
    def encode_mask(self, mask : int):
        masked = qrpenalty.apply_mask(self.get_matrix(),self.reserved,mask)
        free = ~self.reserved

        self.qr[free] = np.where(masked[free],encode.QR_DARK,encode.QR_LIGHT)

    def get_dimension(self):
        return self.dimension

    #
    def get_version(self):
        return self.vi.version

    #
    def get_qr(self):
        return self.qr

    #
    def get_reserved(self):
        return self.reserved

    #
    def get_matrix(self):
        # unset modules count as light
        return self.qr == encode.QR_DARK

    #
    def get_mask(self):
        return self.mask

    #
    def __init__(self,version : int):
        # Prepare for encoding
        self.vi = qrtables.get_version_info(version)

        # Reserve 2-dimensional space for QR code "graphics"
        d = self.vi.get_dimension()
        self.qr = np.full((d,d),encode.QR_UNSET,dtype=np.uint8,order='C')
        self.reserved = np.zeros((d,d),dtype=bool,order='C')
        self.dimension = d
        self.mask = -1

        # Build basic layout..
        self.prep_finder_patterns()
        self.prep_alignment_patterns()
        self.prep_timing_patterns()
        self.prep_dark_module()
        self.reserve_level_mask()
        self.reserve_version()

    def generate_qr_code(self, phrase, mask : int=None) -> np.ndarray:
        if (mask is not None and (mask < 0 or mask >= qrpenalty.QR_NUM_MASKS)):
            raise ValueError(f"Mask must be between 0 and 7, got {mask}")

        res = phrasecoder.build_codewords(phrase,self.vi.version)
        self.encode_layout(res)

        if (mask is None):
            mask = qrpenalty.select_mask(self.get_matrix(),self.reserved)

        self.mask = mask
        self.encode_mask(mask)
        self.insert_level_mask(mask)
        self.insert_version()

        return self.get_matrix()


def generate(phrase, version : int=None, mask : int=None) -> np.ndarray:
    """Encode a phrase into a QR-code module matrix.

        Parameters:
        -----------
        phrase : bytes or str
            Payload, a str is encoded as UTF-8.
        version : int
            Force a QR-code version, by default the smallest one that fits.
        mask : int
            Force a mask pattern 0-7, by default the one with the lowest penalty.

        Raises:
        -------
        CapacityError
            If the payload does not fit into the version (or version 40).

        Return:
        -------
            square numpy bool array, True for dark modules.
    """
    tmp = phrasecoder.to_bytes(phrase)

    if (version is None):
        version = qrtables.find_version(len(tmp))
    elif (len(tmp) > qrtables.get_version_info(version).capacity):
        raise qrtables.CapacityError(f"Payload of {len(tmp)} bytes does not fit version {version}")

    qr = encode(version)
    matrix = qr.generate_qr_code(tmp,mask)

    log.debug("encoded %d bytes as version %d with mask %d",len(tmp),version,qr.get_mask())

    return matrix
