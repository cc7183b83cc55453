#
# GF(256) arithmetic and Reed-Solomon error correction codewords.
#

class galois_field_256(object):
    """
    There are excellent articles about Galois Fields:
    https://en.wikipedia.org/wiki/Finite_field
    https://zavier-henry.medium.com/an-introductory-walkthrough-for-encoding-qr-codes-5a33e1e882b5
    https://www.thonky.com/qr-code-tutorial/error-correction-coding

    The field is generated by a = 2 with the primitive polynomial
    x^8 + x^4 + x^3 + x^2 + 1. The exponent table has 512 entries so that
    the sum of two logarithms can be looked up without a modulo.
    """
    PRIMITIVE = 0x11d

    def __init__(self):
        ex_to_gf = bytearray(512)
        gf_to_ex = bytearray(256)
        gf = 1

        for n in range(255):
            ex_to_gf[n] = gf
            gf_to_ex[gf] = n
            gf = gf << 1

            if (gf & 0x100):
                gf = gf ^ galois_field_256.PRIMITIVE

        for n in range(255,512):
            ex_to_gf[n] = ex_to_gf[n-255]

        # read-only from here on
        self.ex_to_gf = bytes(ex_to_gf)
        self.gf_to_ex = bytes(gf_to_ex)

    #
    def add_sub(self,a : int, b : int) -> int:
        return a ^ b

    #
    def mul(self, a : int, b : int) -> int:
        if (a == 0 or b == 0):
            return 0

        return self.ex_to_gf[self.gf_to_ex[a] + self.gf_to_ex[b]]

    #
    def div(self,a : int, b : int) -> int:
        if (b == 0):
            raise ZeroDivisionError("Division by zero in GF(256)")
        if (a == 0):
            return 0

        return self.ex_to_gf[(self.gf_to_ex[a] - self.gf_to_ex[b]) % 255]

    #
    def e2g(self, a : int) -> int:
        return self.ex_to_gf[a % 255]

    #
    def g2e(self, a : int) -> int:
        return self.gf_to_ex[a]


# One shared instance, built at import time.
gf256 = galois_field_256()


def gf_multiply(a : int, b : int) -> int:
    return gf256.mul(a,b)


class generator(object):
    """
    The generator polynomial is created by multiplying
    together (x - a**0) through (x - a**(n-1)), where
    n is the number of error codewords to be generated
    and a = 2

    For more information see:
    https://www.thonky.com/qr-code-tutorial/how-create-generator-polynomial

    Polynomials are kept in integer coefficient form, highest degree first,
    so the result of build(n) has n+1 coefficients and starts with 1.
    """

    @staticmethod
    def build(ecw : int) -> bytes:
        if (ecw < 1):
            raise ValueError(f"Unsupported generator size {ecw}")

        gen = bytearray([1])

        for i in range(ecw):
            root = gf256.e2g(i)
            nxt = bytearray(len(gen) + 1)

            # gen * x + gen * a^i
            for j in range(len(gen)):
                nxt[j] = gf256.add_sub(nxt[j],gen[j])
                nxt[j+1] = gf256.add_sub(nxt[j+1],gf256.mul(gen[j],root))

            gen = nxt

        return bytes(gen)

    @staticmethod
    def to_exponents(gen : bytes) -> bytes:
        # leading coefficient is always a^0 and left out, like in the
        # published generator tables
        return bytes(gf256.g2e(c) for c in gen[1:])


class polydiv(object):
    #
    # block in an integer coefficient form
    # gen   in an integer coefficient form (as from generator.build())
    #
    # returns ECC codewords, len(gen)-1 of them
    #
    def remainder(self, block : bytes, gen : bytes) -> bytearray:
        ecw = len(gen) - 1
        blklen = len(block)

        # block * x^ecw, bytearray zeroes each index by default
        p = bytearray(blklen + ecw)
        p[0:blklen] = block

        for n in range(blklen):
            coef = p[n]

            # The first coefficient will be zero in any case
            if (coef == 0):
                continue

            for m in range(len(gen)):
                p[n+m] = gf256.add_sub(p[n+m],gf256.mul(gen[m],coef))

        return p[blklen:]


def rs_encode(block : bytes, ecw : int) -> bytes:
    return bytes(polydiv().remainder(block,generator.build(ecw)))
