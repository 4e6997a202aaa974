import json
import os
import sys

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
INPUT = os.path.join(ROOT, "output", "results.json")
OUT_PNG = os.path.join(ROOT, "output", "oki_window.png")

# códigos de cor do frame meter
DOWN, VULNERABLE, REVERSAL, IDLE, ACTIVE = range(5)
COLORS = ["#4a4a4a", "#2e9e4f", "#c0392b", "#bdc3c7", "#e67e22"]


def build_frame_meter(timeline, length=None):
    """
    Monta o frame meter (2 x frames) a partir de um `OkiTimeline` serializado.

    Linha 0: oponente (caído, atingível, reversal ativo).
    Linha 1: atacante (preparação, frames ativos do golpe final).
    Os frames são 1-based: a coluna i representa o frame i + 1.
    """

    window_start = timeline["window_start"]
    window_end = timeline["window_end"]
    our_start = timeline["our_start"]
    our_end = timeline["our_end"]

    if length is None:
        length = max(window_end + 3, our_end + 3, window_start + 2)

    frames = np.arange(1, length + 1)
    meter = np.full((2, length), IDLE, dtype=int)

    meter[0] = np.where(frames < window_start, DOWN, REVERSAL)
    meter[0][(frames >= window_start) & (frames <= window_end)] = VULNERABLE

    meter[1][(frames >= our_start) & (frames <= our_end)] = ACTIVE
    return meter


def main():
    if not os.path.exists(INPUT):
        print("No results.json found at", INPUT)
        return

    with open(INPUT, "r", encoding="utf-8") as f:
        data = json.load(f)

    timeline = data.get("oki_timeline")
    if not timeline:
        print("No oki timeline to plot")
        return

    meter = build_frame_meter(timeline)

    # Plota o frame meter. Labels em Português (pt-BR).
    plt.figure(figsize=(12, 2.5))
    plt.imshow(meter, aspect="auto", cmap=ListedColormap(COLORS), vmin=0, vmax=len(COLORS) - 1, interpolation="nearest")
    plt.yticks([0, 1], ["oponente", "atacante"])
    step = 5 if meter.shape[1] <= 80 else 10
    ticks = np.arange(0, meter.shape[1], step)
    plt.xticks(ticks, ticks + 1)
    plt.xlabel("Frame")
    plt.title(f"Oki: {timeline['classification']} (ativo {timeline['our_start']}-{timeline['our_end']})")
    plt.tight_layout()
    plt.savefig(OUT_PNG)
    print('Saved plot to', OUT_PNG)


if __name__ == '__main__':
    if len(sys.argv) > 1:
        INPUT = sys.argv[1]
    main()
