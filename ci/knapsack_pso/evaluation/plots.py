from __future__ import annotations

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from pathlib import Path
from typing import Dict, Sequence


class Plotter:
    def __init__(self, output_dir: str = "results/figures"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        sns.set_theme(style="darkgrid")
        plt.rcParams['figure.figsize'] = [12, 8]
        plt.rcParams['font.size'] = 11
        plt.rcParams['axes.labelsize'] = 12
        plt.rcParams['axes.titlesize'] = 14
        plt.rcParams['legend.fontsize'] = 10

    def save_fig(self, filename: str, dpi: int = 150, tight: bool = True) -> Path:
        """Save the current figure into output_dir."""
        path = self.output_dir / filename
        if tight:
            plt.tight_layout()
        plt.savefig(path, dpi=dpi, bbox_inches='tight')
        plt.close()
        return path

    def plot_convergence(
        self,
        history: Sequence[float],
        title: str = "Convergence",
        filename: str = "convergence.png",
    ) -> Path:
        """
        Global best fitness per iteration for one run.
        An empty history (max_iterations=0) still produces a figure with a placeholder.
        """
        fig, ax = plt.subplots(figsize=(10, 5))

        if len(history) == 0:
            ax.text(0.5, 0.5, "No data to display", ha="center", va="center", transform=ax.transAxes)
            ax.set_xticks([])
            ax.set_yticks([])
        else:
            data = np.asarray(history, dtype=float)
            ax.plot(np.arange(len(data)), data, color="#3b82f6", linewidth=1.5)
            if len(data) <= 100:
                ax.scatter(np.arange(len(data)), data, s=10, color="#60a5fa")
            ax.set_xlabel("Iteration")
            ax.set_ylabel("Best fitness")
            ax.set_title(f"{title} | min={data.min():.0f} max={data.max():.0f}")

        return self.save_fig(filename)

    def plot_trials_convergence(
        self,
        histories_by_label: Dict[str, Sequence[Sequence[float]]],
        title: str = "Convergence over trials",
        filename: str = "trials_convergence.png",
    ) -> Path:
        """
        Mean global best per iteration with a min-max band, one line per configuration.
        Histories of one configuration all share max_iterations, so they align by index.
        """
        frames = []
        for label, histories in histories_by_label.items():
            for trial, h in enumerate(histories):
                frames.append(pd.DataFrame({
                    "iteration": np.arange(len(h)),
                    "best_fitness": np.asarray(h, dtype=float),
                    "config": label,
                    "trial": trial,
                }))

        fig, ax = plt.subplots(figsize=(12, 6))
        if frames:
            df = pd.concat(frames, ignore_index=True)
            sns.lineplot(
                data=df, x="iteration", y="best_fitness", hue="config",
                estimator="mean", errorbar=("pi", 100), ax=ax,
            )
        else:
            ax.text(0.5, 0.5, "No data to display", ha="center", va="center", transform=ax.transAxes)

        ax.set_title(title)
        return self.save_fig(filename)
