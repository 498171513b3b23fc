# ================== CONTROLADOR DE LA DEMO ==================
import sys
from collections import namedtuple
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum

from config import MSG_PLACEHOLDER, MSG_LOADING, MSG_UNKNOWN
from drawing import to_surface_point
from predict import RecognitionError
from vision import normalize_surface


class State(Enum):
    IDLE       = "idle"
    DRAWING    = "drawing"
    PREDICTING = "predicting"
    PREDICTED  = "predicted"
    FAILED     = "failed"

# kind: "placeholder" | "loading" | "digit" | "error"
Display = namedtuple("Display", ["kind", "text"])


def run_sync(job, on_done):
    """Ejecuta el trabajo en el acto y entrega un Future ya resuelto."""
    fut = Future()
    try:
        fut.set_result(job())
    except Exception as e:
        fut.set_exception(e)
    on_done(fut)
    return fut


class BackgroundRunner:
    """
    Ejecuta trabajos en un hilo aparte. Los callbacks sólo se llaman desde
    drain(), que la UI invoca en su propio hilo.
    """

    def __init__(self, max_workers=1):
        self.executor = ThreadPoolExecutor(max_workers=max_workers)
        self._pending = []   # (future, callback) aún sin entregar

    def __call__(self, job, on_done):
        return self.submit(job, on_done)

    def submit(self, job, on_done):
        fut = self.executor.submit(job)
        self._pending.append((fut, on_done))
        return fut

    @property
    def pending(self):
        return len(self._pending)

    def drain(self):
        """Entrega los trabajos terminados. Devuelve cuántos se entregaron."""
        done, still = [], []
        for item in self._pending:
            (done if item[0].done() else still).append(item)
        self._pending = still
        for fut, on_done in done:
            on_done(fut)
        return len(done)

    def shutdown(self):
        self._pending = []
        self.executor.shutdown(wait=False, cancel_futures=True)


class DemoController:
    """
    Orquesta dibujo, predicción y limpieza. Sólo una petición en vuelo;
    cada predicción lleva un número de generación y los resultados viejos
    (tras limpiar o cerrar) se descartan.
    """

    def __init__(self, surface, recognizer, run_async=run_sync,
                 on_change=None, on_predicted=None):
        self.surface      = surface
        self.recognizer   = recognizer
        self.run_async    = run_async
        self.on_change    = on_change
        self.on_predicted = on_predicted

        self.state      = State.IDLE
        self.prediction = None
        self.error      = None
        self.last_image = None

        self._generation = 0
        self._in_flight  = None   # token de la petición pendiente
        self._closed     = False

    # ---------- Consultas ----------
    @property
    def can_predict(self):
        return not self._closed and self._in_flight is None

    def display(self):
        if self.state is State.PREDICTING:
            return Display("loading", MSG_LOADING)
        if self.error is not None:
            return Display("error", self.error)
        if self.prediction is not None:
            return Display("digit", self.prediction)
        return Display("placeholder", MSG_PLACEHOLDER)

    # ---------- Dibujo ----------
    def stroke_start(self, event, origin=(0, 0)):
        self.surface.start_stroke(to_surface_point(event, origin))
        if not self.surface.is_drawing:
            return
        if self.state in (State.IDLE, State.PREDICTED, State.FAILED):
            self._set_state(State.DRAWING)

    def stroke_move(self, event, origin=(0, 0)):
        if not self.surface.is_drawing:
            return None
        return self.surface.extend_stroke(to_surface_point(event, origin))

    def stroke_end(self):
        self.surface.end_stroke()
        if self.state is State.DRAWING:
            self._set_state(State.IDLE)

    # ---------- Acciones ----------
    def clear(self):
        self.surface.clear()
        self.prediction = None
        self.error      = None
        self.last_image = None
        # la petición pendiente (si la hay) ya no debe pintar nada
        self._generation += 1
        self._set_state(State.IDLE)

    def predict(self):
        """Lanza una predicción. Devuelve el token, o None si no se pudo."""
        if not self.can_predict:
            return None
        if self.surface.is_drawing:
            self.surface.end_stroke()

        self.prediction = None
        self.error      = None
        try:
            image = normalize_surface(self.surface)
        except Exception as e:
            print(f"No se pudo preparar la imagen: {e!r}", file=sys.stderr)
            self.last_image = None
            self.error = str(e) or MSG_UNKNOWN
            self._set_state(State.FAILED)
            return None

        self._generation += 1
        token = self._generation
        self._in_flight = token
        self.last_image = image
        self._set_state(State.PREDICTING)

        recognizer = self.recognizer
        self.run_async(lambda: recognizer.recognize(image.png_base64),
                       lambda fut: self._finish(token, fut))
        return token

    def close(self):
        """Desmontaje: cualquier respuesta posterior se ignora."""
        self._closed = True

    # ---------- Internos ----------
    def _finish(self, token, fut):
        if self._in_flight == token:
            self._in_flight = None
        if self._closed:
            return
        if token != self._generation:
            # resultado viejo: sólo se libera el botón de predecir
            self._notify()
            return

        exc = fut.exception()
        if exc is None:
            self.prediction = fut.result()
            self._set_state(State.PREDICTED)
            if self.on_predicted is not None:
                self.on_predicted(self.prediction)
        elif isinstance(exc, RecognitionError):
            self.error = str(exc)
            self._set_state(State.FAILED)
        else:
            print(f"Error inesperado en la predicción: {exc!r}", file=sys.stderr)
            self.error = str(exc) or MSG_UNKNOWN
            self._set_state(State.FAILED)

    def _set_state(self, state):
        self.state = state
        self._notify()

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self)
