# ================== INTERFAZ GRÁFICA (Tkinter) ==================
import sys
import tkinter as tk
from tkinter import ttk

from PIL import Image, ImageTk
import pyttsx3

from config import CANVAS_SIZE, BRUSH_SIZE, BACKGROUND, STROKE_COLOR, POLL_MS, SPEAK_RESULTS
from controller import BackgroundRunner, DemoController
from drawing import DrawingSurface, PointerEvent

RESULT_COLORS = {
    "placeholder": "#475569",
    "loading":     "#64748b",
    "digit":       "#4ade80",
    "error":       "#f87171",
}

def speak(text):
    try:
        engine = pyttsx3.init()
        engine.say(text)
        engine.runAndWait()
    except Exception as e:
        print(f"Sin voz: {e}", file=sys.stderr)

class DigitApp:
    def __init__(self, root, recognizer):
        self.root = root
        self.root.title("Reconocimiento de dígitos con IA")

        self.runner  = BackgroundRunner()
        self.running = True

        # ---------- Lienzo ----------
        frame_draw = ttk.Frame(root)
        frame_draw.pack(side="left", padx=10, pady=10)
        ttk.Label(frame_draw, text="Dibuja un dígito (0-9) en el recuadro").pack()

        self.canvas_size = CANVAS_SIZE
        self.brush       = BRUSH_SIZE
        self.canvas = tk.Canvas(frame_draw, width=self.canvas_size, height=self.canvas_size,
                                bg=BACKGROUND, cursor="crosshair", highlightthickness=2,
                                highlightbackground="#475569")
        self.canvas.pack(padx=10, pady=10)

        self.surface = DrawingSurface(self.canvas_size, self.canvas_size)
        self.controller = DemoController(
            self.surface, recognizer,
            run_async=self.runner,
            on_change=self._render,
            on_predicted=self._announce,
        )

        # ---------- Controles y resultado ----------
        frame_side = ttk.Frame(root)
        frame_side.pack(side="left", padx=10, pady=10, fill="y")

        controls = ttk.Frame(frame_side)
        controls.pack(pady=5, fill="x")
        self.predict_btn = ttk.Button(controls, text="Predecir", command=self.controller.predict)
        self.predict_btn.pack(side="left", padx=5)
        self.clear_btn = ttk.Button(controls, text="Limpiar", command=self.clear_canvas)
        self.clear_btn.pack(side="left", padx=5)

        self.result_var = tk.StringVar()
        self.result_label = tk.Label(frame_side, textvariable=self.result_var, width=16, height=4,
                                     bg="#0f172a", wraplength=220, font=("Arial", 18, "bold"))
        self.result_label.pack(pady=10, fill="x")

        # Lo que realmente se envía al servicio
        ttk.Label(frame_side, text="Entrada enviada (28x28):").pack(pady=(10, 0))
        self.preview_label = tk.Label(frame_side, bg=BACKGROUND)
        self.preview_label.pack(pady=5)

        self.canvas.bind("<Button-1>", self._start_stroke)
        self.canvas.bind("<B1-Motion>", self._draw_stroke)
        self.canvas.bind("<ButtonRelease-1>", self._end_stroke)
        self.canvas.bind("<Leave>", self._end_stroke)

        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

        self._render(self.controller)
        self._poll()

    # ---------- Peticiones en segundo plano ----------
    def _poll(self):
        # Tk sólo se toca desde su hilo: aquí se entregan los resultados
        if not self.running:
            return
        self.runner.drain()
        self.root.after(POLL_MS, self._poll)

    # ---------- Dibujo ----------
    def _start_stroke(self, event):
        self.controller.stroke_start(PointerEvent(event.x, event.y))

    def _draw_stroke(self, event):
        seg = self.controller.stroke_move(PointerEvent(event.x, event.y))
        if seg is None:
            return
        self.canvas.create_line(*seg, width=self.brush, fill=STROKE_COLOR,
                                capstyle=tk.ROUND, joinstyle=tk.ROUND, smooth=True)

    def _end_stroke(self, event):
        if self.surface.is_drawing:
            self.controller.stroke_end()

    def clear_canvas(self):
        self.canvas.delete("all")
        self.controller.clear()

    # ---------- Resultado ----------
    def _render(self, controller):
        display = controller.display()
        self.result_var.set(display.text)
        self.result_label.configure(fg=RESULT_COLORS[display.kind])
        self.predict_btn.configure(state="normal" if controller.can_predict else "disabled")

        if controller.last_image is None:
            self.preview_label.configure(image="")
            self.preview_label.imgtk = None
        else:
            small = Image.fromarray(controller.last_image.pixels)
            imgtk = ImageTk.PhotoImage(image=small.resize((84, 84), Image.NEAREST))
            self.preview_label.imgtk = imgtk
            self.preview_label.configure(image=imgtk)

    def _announce(self, digit):
        if SPEAK_RESULTS:
            self.root.update_idletasks()
            speak(f"Es el número {digit}")

    # ---------- Cierre ----------
    def on_close(self):
        self.running = False
        self.controller.close()
        self.runner.shutdown()
        self.surface.release()
        self.root.destroy()
