#
# Data masking and mask penalty evaluation.
#

import logging
import sys

import numpy as np

log = logging.getLogger(__name__)

QR_NUM_MASKS = 8


def mask_pattern(mask : int, dim : int) -> np.ndarray:
    """Return a dim x dim bool array, True where the mask flips a module."""
    row, col = np.indices((dim,dim))

    if (mask == 0):
        # (row + column) mod 2 == 0
        return (row + col) % 2 == 0
    elif (mask == 1):
        # (row) mod 2 == 0
        return row % 2 == 0
    elif (mask == 2):
        # (column) mod 3 == 0
        return col % 3 == 0
    elif (mask == 3):
        # (row + column) mod 3 == 0
        return (row + col) % 3 == 0
    elif (mask == 4):
        # ( floor(row / 2) + floor(column / 3) ) mod 2 == 0
        return (row // 2 + col // 3) % 2 == 0
    elif (mask == 5):
        # ((row * column) mod 2) + ((row * column) mod 3) == 0
        return ((row * col) % 2) + ((row * col) % 3) == 0
    elif (mask == 6):
        # ( ((row * column) mod 2) + ((row * column) mod 3) ) mod 2 == 0
        return (((row * col) % 2) + ((row * col) % 3)) % 2 == 0
    elif (mask == 7):
        # ( ((row + column) mod 2) + ((row * column) mod 3) ) mod 2 == 0
        return (((row + col) % 2) + ((row * col) % 3)) % 2 == 0

    raise ValueError(f"Mask must be between 0 and 7, got {mask}")


def apply_mask(qr : np.ndarray, reserved : np.ndarray, mask : int) -> np.ndarray:
    # returns a masked copy, reserved modules are never flipped
    flip = mask_pattern(mask,qr.shape[0]) & ~reserved
    return np.logical_xor(qr,flip)


class penalty(object):
    """
    Penalty rules from ISO/IEC 18004 section 7.8.3. The QR-code is a
    square bool array where True is a dark module.
    """

    # match tables for rule 3, 1:1:3:1:1 with 4 light modules on either side
    rule3_1_pat = np.array((1,0,1,1,1,0,1,0,0,0,0),dtype=bool)
    rule3_2_pat = np.array((0,0,0,0,1,0,1,1,1,0,1),dtype=bool)

    def __init__(self, qr : np.ndarray):
        # size of the qr code
        self.d = qr.shape[0]
        self.qr = np.asarray(qr,dtype=bool)

    #
    def calc_rule1_line_(self, line) -> int:
        penalty_rule1 = 0
        consecutive = 1

        for n in range(1,len(line)):
            if (line[n] == line[n-1]):
                consecutive += 1

                if (consecutive == 5):
                    penalty_rule1 += 3
                elif (consecutive > 5):
                    penalty_rule1 += 1
            else:
                consecutive = 1

        return penalty_rule1

    #
    def calc_rule1(self) -> int:
        # 5 consecutive pixels of the same color = 3 penalty points.
        # After 5 each additional pixel of the same color add 1 penalty point.
        # Do check for each row and column.
        penalty_rule1 = 0

        for row in self.qr.tolist():
            penalty_rule1 += self.calc_rule1_line_(row)

        for col in self.qr.T.tolist():
            penalty_rule1 += self.calc_rule1_line_(col)

        return penalty_rule1

    #
    def calc_rule2(self) -> int:
        # 3 points for each 2x2 block of the same color, overlapping blocks
        # are counted separately
        q = self.qr
        a = q[:-1,:-1]
        same = (a == q[:-1,1:]) & (a == q[1:,:-1]) & (a == q[1:,1:])

        return int(np.count_nonzero(same)) * 3

    #
    def calc_rule3_(self, q : np.ndarray, pat : np.ndarray) -> int:
        # only runs fully inside the symbol count, the quiet zone is not
        # taken as the 4 light modules of a run touching the edge
        if (q.shape[1] < len(pat)):
            return 0

        win = np.lib.stride_tricks.sliding_window_view(q,len(pat),axis=1)
        return int(np.count_nonzero(np.all(win == pat,axis=2))) * 40

    def calc_rule3(self) -> int:
        # look for 10111010000 or 00001011101 patterns, where 1 = dark
        penalty_rule3 = 0

        for q in (self.qr, self.qr.T):
            penalty_rule3 += self.calc_rule3_(q,penalty.rule3_1_pat)
            penalty_rule3 += self.calc_rule3_(q,penalty.rule3_2_pat)

        return penalty_rule3

    #
    def calc_rule4(self) -> int:
        # 10 points for every full 5% the dark modules deviate from 50%
        total = self.d * self.d
        black = int(np.count_nonzero(self.qr))

        percent = black * 100 / total
        return int(abs(percent - 50) // 5) * 10

    #
    def calc_total(self) -> int:
        return self.calc_rule1() + self.calc_rule2() + self.calc_rule3() + self.calc_rule4()


def select_mask(qr : np.ndarray, reserved : np.ndarray) -> int:
    """Evaluate all masks on scratch copies and return the best mask id.

    Masks are tried in ascending order and only a strictly lower penalty
    replaces the current best, so ties go to the lowest mask id.
    """
    lowest_mask = -1
    lowest_penalty = sys.maxsize

    for mask in range(QR_NUM_MASKS):
        pe = penalty(apply_mask(qr,reserved,mask))
        score = pe.calc_total()
        log.debug("mask %d penalty %d",mask,score)

        if (score < lowest_penalty):
            lowest_mask = mask
            lowest_penalty = score

    return lowest_mask
