import os

from dotenv import load_dotenv

load_dotenv()

BACKEND_DIR = os.path.join(os.path.dirname(__file__), "..")

CORS_ORIGINS = os.getenv("FLIGHTCALC_CORS_ORIGINS", "http://localhost:3000").split(",")
OUTPUT_DIR = os.getenv("FLIGHTCALC_OUTPUT_DIR", os.path.join(BACKEND_DIR, "output"))

# World map drawn under the route; must be an equirectangular image
MAP_IMAGE = os.getenv("FLIGHTCALC_MAP_IMAGE", "assets/images/1280px-Equirectangular_projection_SW.jpg")
CANVAS_WIDTH = int(os.getenv("FLIGHTCALC_CANVAS_WIDTH", "1280"))
CANVAS_HEIGHT = int(os.getenv("FLIGHTCALC_CANVAS_HEIGHT", "640"))
