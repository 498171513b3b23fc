# ================== VISIÓN: REDIMENSIONADO Y CODIFICACIÓN ==================
import base64
from collections import namedtuple

import cv2
import numpy as np

from config import IMG_SIZE

NormalizedImage = namedtuple("NormalizedImage", ["pixels", "png_base64"])

def downsample(pixels, size=IMG_SIZE):
    """
    Lienzo RGB (H,W,3) de cualquier tamaño -> (size,size,3) uint8.
    """
    arr = np.asarray(pixels, dtype=np.uint8)
    return cv2.resize(arr, (size, size), interpolation=cv2.INTER_AREA)

def encode_png_base64(pixels):
    # OpenCV trabaja en BGR
    bgr = cv2.cvtColor(np.asarray(pixels, dtype=np.uint8), cv2.COLOR_RGB2BGR)
    ok, buf = cv2.imencode(".png", bgr)
    if not ok:
        raise ValueError("No se pudo codificar la imagen como PNG.")
    return base64.b64encode(buf.tobytes()).decode("ascii")

def normalize_surface(surface, size=IMG_SIZE):
    """
    Copia reducida del lienzo + PNG en base64, lista para enviar.
    No mira el contenido dibujado: sólo redimensiona y codifica.
    """
    small = downsample(surface.to_array(), size)
    return NormalizedImage(small, encode_png_base64(small))
