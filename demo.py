import logging
import sys

from qrbyte import qrcoder as q
from qrbyte import qrimage

logging.basicConfig(level=logging.DEBUG,format="%(name)s: %(message)s")

phrase = sys.argv[1] if len(sys.argv) > 1 else "http://www.deadcoderssociety.net/"
qr_code = q.generate(phrase)

ima = qrimage.to_image(qr_code,scale=8)
ima.show()
