# ================== PUNTO DE ENTRADA ==================
import tkinter as tk
from tkinter import ttk

from dotenv import load_dotenv

from predict import GeminiDigitRecognizer
from ui import DigitApp

def run():
    # API_KEY puede venir de un .env en el directorio actual
    load_dotenv()

    root = tk.Tk()
    try:
        ttk.Style(root).theme_use("clam")
    except tk.TclError:
        pass

    recognizer = GeminiDigitRecognizer()
    app = DigitApp(root, recognizer)
    root.mainloop()

if __name__ == "__main__":
    run()
