# ================== LIENZO: TRAZOS A MANO ALZADA ==================
from collections import namedtuple
from functools import singledispatch

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from config import CANVAS_SIZE, BRUSH_SIZE, BACKGROUND, STROKE_COLOR

SurfacePoint = namedtuple("SurfacePoint", ["x", "y"])

# Eventos de entrada: el puntero ya trae coordenadas locales del lienzo,
# el toque trae coordenadas de la ventana (viewport).
PointerEvent = namedtuple("PointerEvent", ["x", "y"])
TouchEvent   = namedtuple("TouchEvent", ["client_x", "client_y"])


@singledispatch
def to_surface_point(event, origin=(0, 0)):
    raise TypeError(f"Evento de entrada no soportado: {type(event).__name__}")

@to_surface_point.register(PointerEvent)
def _pointer_point(event, origin=(0, 0)):
    return SurfacePoint(event.x, event.y)

@to_surface_point.register(TouchEvent)
def _touch_point(event, origin=(0, 0)):
    left, top = origin
    return SurfacePoint(event.client_x - left, event.client_y - top)


class DrawingSurface:
    """
    Lienzo raster persistente (imagen PIL) con fondo fijo.
    Sólo se pinta entre start_stroke y end_stroke.
    """

    def __init__(self, width=CANVAS_SIZE, height=CANVAS_SIZE,
                 background=BACKGROUND, stroke_color=STROKE_COLOR, brush=BRUSH_SIZE):
        self.width        = width
        self.height       = height
        self.background   = background
        self.stroke_color = stroke_color
        self.brush        = brush

        self.image = Image.new("RGB", (width, height), background)
        self.draw  = ImageDraw.Draw(self.image)
        self.last_pt = None

    @property
    def is_drawing(self):
        return self.last_pt is not None

    def start_stroke(self, point):
        if self.image is None:
            return
        self.last_pt = SurfacePoint(*point)

    def extend_stroke(self, point):
        """Pinta el segmento desde el último punto. Devuelve el segmento o None."""
        if self.image is None or self.last_pt is None:
            return None
        x0, y0 = self.last_pt
        x1, y1 = point
        self.draw.line([x0, y0, x1, y1], fill=self.stroke_color,
                       width=self.brush, joint="curve")
        # extremos redondeados
        r = self.brush / 2.0
        for cx, cy in ((x0, y0), (x1, y1)):
            self.draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=self.stroke_color)
        self.last_pt = SurfacePoint(x1, y1)
        return (x0, y0, x1, y1)

    def end_stroke(self):
        self.last_pt = None

    def clear(self):
        self.last_pt = None
        if self.image is None:
            return
        self.draw.rectangle([0, 0, self.width, self.height], fill=self.background)

    def release(self):
        self.image   = None
        self.draw    = None
        self.last_pt = None

    def to_array(self):
        if self.image is None:
            return None
        return np.array(self.image)

    def is_blank(self):
        arr = self.to_array()
        if arr is None:
            return True
        bg = np.array(ImageColor.getrgb(self.background), dtype=arr.dtype)
        return bool(np.all(arr == bg))
