"""
Merging: combine two generated datasets and a third-party one
while keeping cluster labels apart.
"""

import numpy as np
import pandas as pd
from clugen import clugen, clumerge

def merging_datasets():
    a = clugen(2, 3, 150, [1, 1], 0.3, [20, 20], 6, 1, 0.5, rng=1)
    b = clugen(2, 2, 100, [1, -1], 0.3, [20, 20], 6, 1, 0.5, cluster_offset=[40, 0], rng=2)

    # External data, e.g. loaded from a CSV: a blob labelled 10
    rng = np.random.default_rng(3)
    external = pd.DataFrame(rng.normal(size=(50, 2)) + [-30, -30], columns=["points_0", "points_1"])
    external["clusters"] = 10

    merged = clumerge(a, b, external)
    print("--- Merged dataset ---")
    print(f"Points: {merged['points'].shape}")
    labels, counts = np.unique(merged["clusters"], return_counts=True)
    for lbl, cnt in zip(labels, counts):
        print(f"- cluster {lbl}: {cnt} points")

    # Cluster-level fields are stacked without relabeling
    centers = clumerge(a, b, fields=("centers",), clusters_field=None)["centers"]
    print(f"\nCenters of the generated clusters:\n{np.round(centers, 2)}")

if __name__ == "__main__":
    merging_datasets()
