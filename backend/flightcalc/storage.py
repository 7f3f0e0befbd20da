import os
import pandas as pd

from flightcalc.config import OUTPUT_DIR


def ensure_output_dir():
    os.makedirs(OUTPUT_DIR, exist_ok=True)

def save_csv(df: pd.DataFrame, name: str) -> str:
    ensure_output_dir()
    path = os.path.join(OUTPUT_DIR, f"{name}.csv")
    df.to_csv(path, index=False)
    return path

def load_csv(name: str) -> pd.DataFrame:
    path = os.path.join(OUTPUT_DIR, f"{name}.csv")
    return pd.read_csv(path)
