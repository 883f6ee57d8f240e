"""
Basic generation: three elongated clusters in 2D.
Shows the result container and its pandas/arrow exports.
"""

import logging
from clugen import ClusterGenerator, setup_logging

def basic_generation():
    setup_logging(logging.DEBUG)
    cg = ClusterGenerator(seed=42)

    res = cg.generate(2, 3, 300, [1, 0], 0.2, [10, 10], 8, 2, 0.8)
    print("--- Cluster properties ---")
    for i in range(res.num_clusters):
        print(
            f"Cluster {i + 1}: size={res.sizes[i]:3d} | center=({res.centers[i][0]:6.2f}, {res.centers[i][1]:6.2f})"
            f" | angle={res.angles[i]:+.3f} | length={res.lengths[i]:.2f}"
        )

    # Same generator, a different projection and displacement
    res_n = cg.generate(3, 4, 400, [0, 0, 1], 0.1, [15, 15, 15], 10, 1, 1.0, proj_dist_fn="unif", point_dist_fn="n")
    print("\n--- 3D points as a DataFrame ---")
    print(res_n.to_pandas().head())
    print(res_n.to_arrow().schema)

if __name__ == "__main__":
    basic_generation()
