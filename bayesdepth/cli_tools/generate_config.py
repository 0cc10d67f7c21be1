from ruamel.yaml import YAML
import os


def generate_default_config(output_path, flat=False):
    """
    Generate a default Bayesian depth configuration file with comments.
    If flat is True, the parameters are written at the top level instead of
    under a bayesian_depth section.
    """
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)

    config_text = """
bayesian_depth:
  # ----------- Depth Limits ----------- #
  depth_min: 1.0  # Minimum depth the locator allows in km
  depth_max: 700.0  # Maximum depth the locator allows in km

  # ----------- Default Shallow Prior ----------- #
  default_depth: 10.0  # Default Bayesian depth for shallow earthquakes in km
  default_depth_se: 5.0  # Default Bayesian depth standard error in km

  # ----------- Zone Statistics ----------- #
  zone_stats_spread: 5.0  # Fixed zone statistics spread in km, also the spread floor
  repair_pivot_depth: 400.0  # Corrupt statistics are repaired upward below and downward above this depth
  shallowest_deep: 150.0  # Zone depth in km separating the shallow and deep filtering regimes
  structure_tol: [60.0, 150.0]  # Depth tolerance across a zone facet in km (shallow, deep)
  two_point_inflation: 1.5  # Spread inflation when only two zone samples survive
  one_point_inflation: 2.0  # Spread inflation when only one zone sample survives

  # ----------- Slab Model ----------- #
  slab_max_shallow_depth: 50.0  # Deepest trial depth in km where the prior can stay shallow over a slab
  slab_merge_depth: 80.0  # Slabs shallower than this in km merge with the shallow crust
  slab_spread_factor: 3.0  # Converts one sigma slab errors to the 99th percentile spread
  default_slab_se: 30.0  # Slab spread in km when the slab has no error bars
  slab_edge_widening: [0.5, 1.0]  # Bound widening with two or three missing grid corners
  min_slab_increment: 0.05  # Minimum slab grid spacing in degrees, separates tilted rows
  tilted_area_increment: 7.0  # Jump in degrees that starts a new tilted slab area
  grid_tolerance: 0.001  # Tolerance in degrees for comparing grid coordinates"""

    config = yaml.load(config_text)
    if flat:
        config = config['bayesian_depth']

    with open(output_path, "w") as file:
        yaml.dump(config, file)

    print(f"Default configuration file generated at: {output_path}")


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Generate a default Bayesian depth configuration file.")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default="bayesian_depth.yml",
        help="Output path for the configuration file (default: bayesian_depth.yml)"
    )
    parser.add_argument(
        "--flat",
        action="store_true",
        help="Write the parameters at the top level instead of under a bayesian_depth section"
    )
    args = parser.parse_args()

    output_path = os.path.abspath(args.output)
    generate_default_config(output_path, flat=args.flat)


if __name__ == "__main__":
    main()
