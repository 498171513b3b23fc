# ================== CONFIGURACIÓN GENERAL ==================

# Lienzo de dibujo (UI)
CANVAS_SIZE  = 280         # tamaño del cuadro de dibujo en px
BRUSH_SIZE   = 18          # grosor del pincel
BACKGROUND   = "#020617"   # fondo del lienzo (casi negro)
STROKE_COLOR = "white"     # color del trazo

# Imagen enviada al servicio (formato MNIST)
IMG_SIZE = 28

# Servicio de reconocimiento (Gemini)
API_KEY_ENV  = "API_KEY"
GEMINI_MODEL = "gemini-2.5-flash"
RECOGNITION_PROMPT = (
    "You are an expert MNIST handwritten digit recognition model. "
    "Analyze this image of a handwritten digit. "
    "Your response must be only the single digit (0-9) you recognize. "
    "Provide no other explanation, text, or formatting. Just the digit."
)

# Interfaz
POLL_MS       = 15         # cada cuánto se revisa si terminó la petición
SPEAK_RESULTS = True       # anunciar el dígito con voz

MSG_PLACEHOLDER = "Predicción"
MSG_LOADING     = "Reconociendo..."
MSG_NO_API_KEY  = "API Key no configurada. La demo interactiva está deshabilitada."
MSG_NO_DIGIT    = "No se pudo reconocer un dígito. Inténtalo de nuevo."
MSG_UNKNOWN     = "Ocurrió un error desconocido durante la predicción."
