#
# Render a finished QR-code module matrix into an image.
#

import base64
import io

import numpy as np
from PIL import Image

QR_BLACK = 0        # final pixel in black
QR_WHITE = 255      # final pixel in white

# quiet zone in modules
QR_BORDER = 4


def to_image(matrix : np.ndarray, scale : int=1, border : int=QR_BORDER) -> Image.Image:
    """Grayscale image with scale x scale pixels per module and a quiet zone
    of border modules on every side."""
    if (scale < 1 or border < 0):
        raise ValueError(f"Invalid scale {scale} or border {border}")

    pix = np.where(np.asarray(matrix,dtype=bool),QR_BLACK,QR_WHITE).astype(np.uint8)
    pix = np.pad(pix,border,constant_values=QR_WHITE)
    ima = Image.fromarray(pix)

    if (scale > 1):
        ima = ima.resize((ima.width * scale,ima.height * scale),Image.Resampling.NEAREST)

    return ima


def fit_image(matrix : np.ndarray, size : int=200) -> Image.Image:
    """Square size x size image, matrix centred with room for the quiet zone."""
    modules = len(matrix)

    if (size < modules + 2 * QR_BORDER):
        raise ValueError(f"Image size {size} too small for {modules} modules and the quiet zone")

    cell = size // (modules + 2 * QR_BORDER)
    offset = (size - cell * modules) // 2

    ima = Image.new("L",(size,size),QR_WHITE)
    qr = to_image(matrix,scale=cell,border=0)
    ima.paste(qr,(offset,offset))

    return ima


def to_data_url(matrix : np.ndarray, size : int=200) -> str:
    buf = io.BytesIO()
    fit_image(matrix,size).save(buf,format="PNG")

    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
