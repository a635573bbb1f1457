"""
Visualizer for EvoForage.

Produces:
  1. Fitness chart – min / avg / max food eaten plus gene diversity
                     over generations
  2. CSV log       – per-generation stats
"""

import os
import csv
import matplotlib
matplotlib.use("Agg")          # non-interactive backend (no display needed)
import matplotlib.pyplot as plt

from config import SAVE_DIR, LOG_CSV


# ──────────────────────────────────────────────────────────────────────────────
# Directory setup
# ──────────────────────────────────────────────────────────────────────────────

def ensure_dirs(base: str = SAVE_DIR):
    os.makedirs(os.path.join(base, "charts"), exist_ok=True)


# ──────────────────────────────────────────────────────────────────────────────
# Fitness chart
# ──────────────────────────────────────────────────────────────────────────────

def save_fitness_chart(stats: list, base: str = SAVE_DIR,
                       filename: str = "fitness.png"):
    """
    Plot min / avg / max fitness (left axis) and gene diversity
    (right axis) across all generations.
    """
    if not stats:
        return
    gens      = [s["generation"]  for s in stats]
    min_fit   = [s["min_fitness"] for s in stats]
    avg_fit   = [s["avg_fitness"] for s in stats]
    max_fit   = [s["max_fitness"] for s in stats]
    diversity = [s.get("diversity", 0.0) for s in stats]

    fig, ax1 = plt.subplots(figsize=(12, 5), dpi=100)
    fig.patch.set_facecolor("#111111")
    ax1.set_facecolor("#111111")

    ax1.fill_between(gens, min_fit, max_fit, color="#44FF44", alpha=0.15,
                     linewidth=0, zorder=1)
    ax1.plot(gens, avg_fit, color="#44FF44", linewidth=1.2,
             label="Average fitness", zorder=3)
    ax1.plot(gens, max_fit, color="#FFDD44", linewidth=0.8,
             label="Best fitness", zorder=2)
    ax1.set_ylabel("Food eaten", color="white")
    ax1.set_ylim(0, max(max_fit) * 1.05 if max(max_fit) > 0 else 1)
    ax1.tick_params(axis="both", colors="white")
    ax1.set_xlabel("Generation", color="white")

    ax2 = ax1.twinx()
    ax2.set_facecolor("#111111")
    ax2.plot(gens, diversity, color="#CC44FF", linewidth=1.0,
             linestyle="--", label="Gene diversity", zorder=2)
    ax2.set_ylabel("Gene diversity (mean std)", color="white")
    ax2.set_ylim(0, max(diversity) * 1.05 if max(diversity) > 0 else 1)
    ax2.tick_params(colors="white")

    for spine in ax1.spines.values():
        spine.set_edgecolor("#444444")

    # Combined legend
    lines1, labels1 = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax1.legend(lines1 + lines2, labels1 + labels2,
               facecolor="#222222", labelcolor="white",
               loc="upper left", fontsize=8)

    ax1.set_title("Foraging Fitness", color="white", fontsize=12)
    plt.tight_layout()
    path = os.path.join(base, "charts", filename)
    plt.savefig(path, dpi=100, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


# ──────────────────────────────────────────────────────────────────────────────
# CSV log
# ──────────────────────────────────────────────────────────────────────────────

def append_csv(stats: dict, base: str = SAVE_DIR, enabled: bool = LOG_CSV):
    """Append one generation's stats to a CSV file."""
    if not enabled:
        return
    path = os.path.join(base, "fitness_log.csv")
    file_exists = os.path.isfile(path)
    with open(path, "a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(stats.keys()))
        if not file_exists:
            writer.writeheader()
        writer.writerow(stats)
    return path
