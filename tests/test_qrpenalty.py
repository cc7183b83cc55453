import numpy as np
import pytest

from qrbyte import qrpenalty
from qrbyte.qrpenalty import apply_mask, mask_pattern, penalty, select_mask


def test_mask_patterns():
    assert mask_pattern(0,3).tolist() == [[True,False,True],
                                           [False,True,False],
                                           [True,False,True]]
    assert mask_pattern(1,3)[:,0].tolist() == [True,False,True]
    assert mask_pattern(2,4)[0].tolist() == [True,False,False,True]

    m = mask_pattern(4,6)
    assert m[0,0] and m[1,2] and not m[0,3] and not m[2,0]

    # row or column 0 always matches for masks 5 and 6
    for mask in (5,6):
        m = mask_pattern(mask,6)
        assert m[0].all() and m[:,0].all()


def test_mask_pattern_invalid():
    with pytest.raises(ValueError):
        mask_pattern(8,21)


def test_apply_mask_keeps_reserved():
    qr = np.zeros((21,21),dtype=bool)
    reserved = np.zeros((21,21),dtype=bool)
    reserved[0:9,0:9] = True

    for mask in range(8):
        res = apply_mask(qr,reserved,mask)
        assert not res[0:9,0:9].any()
        assert (res[~reserved] == mask_pattern(mask,21)[~reserved]).all()

    # the input is left as it was
    assert not qr.any()


def test_checkerboard_scores_zero():
    qr = mask_pattern(0,21)
    pe = penalty(qr)

    assert pe.calc_rule1() == 0
    assert pe.calc_rule2() == 0
    assert pe.calc_rule3() == 0
    assert pe.calc_rule4() == 0
    assert pe.calc_total() == 0


def test_all_dark():
    pe = penalty(np.ones((21,21),dtype=bool))

    # 21 long runs: 3 + 16 on each of 42 lines
    assert pe.calc_rule1() == 42 * 19
    assert pe.calc_rule2() == 20 * 20 * 3
    assert pe.calc_rule3() == 0
    assert pe.calc_rule4() == 100


def test_rule1_runs():
    qr = mask_pattern(0,21)
    qr[0,0:7] = True

    # one run of 7 in row 0, columns stay alternating
    assert penalty(qr).calc_rule1() == 5


def test_rule3_finder_like():
    qr = np.zeros((21,21),dtype=bool)
    qr[0,0:11] = (1,0,1,1,1,0,1,0,0,0,0)

    assert penalty(qr).calc_rule3() == 40

    qr = np.zeros((21,21),dtype=bool)
    qr[10:21,5] = (0,0,0,0,1,0,1,1,1,0,1)

    assert penalty(qr).calc_rule3() == 40


def test_rule4_steps():
    qr = np.zeros((10,10),dtype=bool)
    qr.flat[0:40] = True
    assert penalty(qr).calc_rule4() == 20

    qr = np.zeros((10,10),dtype=bool)
    qr.flat[0:44] = True
    assert penalty(qr).calc_rule4() == 10

    qr = np.zeros((10,10),dtype=bool)
    qr.flat[0:55] = True
    assert penalty(qr).calc_rule4() == 10


def test_select_mask_is_minimum():
    rng = np.random.default_rng(7)
    qr = rng.random((25,25)) < 0.3
    reserved = np.zeros((25,25),dtype=bool)
    reserved[0:8,0:8] = True

    scores = [penalty(apply_mask(qr,reserved,m)).calc_total() for m in range(8)]

    assert select_mask(qr,reserved) == int(np.argmin(scores))


def test_select_mask_ties_go_to_lowest():
    # nothing to mask, every candidate scores the same
    qr = np.zeros((21,21),dtype=bool)
    reserved = np.ones((21,21),dtype=bool)

    assert select_mask(qr,reserved) == 0


def test_num_masks():
    assert qrpenalty.QR_NUM_MASKS == 8


def test_rule3_needs_light_modules_inside_symbol():
    # the finder-like run touches the right edge, its light side would be
    # in the quiet zone
    qr = np.zeros((21,21),dtype=bool)
    qr[0,14:21] = (1,0,1,1,1,0,1)

    assert penalty(qr).calc_rule3() == 0
