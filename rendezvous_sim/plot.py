# plot.py
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def plot_site_load(stats: pd.DataFrame, out_path: str, title: str = "Site load"):
    """
    Left: occupancy per site (used / capacity).
    Right: read hits per site, only meaningful when reads were issued.
    """
    x = np.arange(len(stats))
    labels = [str(int(s)) for s in stats["site_id"]]

    fig, axes = plt.subplots(1, 2, figsize=(9.6, 4.2), dpi=160)

    ax = axes[0]
    ax.bar(x, stats["capacity"], color="lightgray", label="capacity")
    ax.bar(x, stats["used"], label="used")
    for i, pct in enumerate(stats["occupancy_pct"]):
        ax.text(i, float(stats["used"].iloc[i]), f"{pct:.1f}%", ha="center", va="bottom", fontsize=7)
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_xlabel("site")
    ax.set_ylabel("keys")
    ax.set_title("occupancy")
    ax.legend()

    ax = axes[1]
    ax.bar(x, stats["read_hits"], label="hits")
    ax.bar(x, stats["read_misses"], bottom=stats["read_hits"], label="misses")
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_xlabel("site")
    ax.set_ylabel("reads")
    ax.set_title("read probes")
    ax.legend()

    fig.suptitle(title)
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
