"""Example 1: Minimal Import

This example demonstrates how to:
1. Build a 2x2 MPSGE-style model in code
2. Import it into a RunSpec from its production and demand trees
3. Inspect the coefficient tables and export the spec
"""

from pathlib import Path

from mpsge_runspec import SimpleModel, import_mpsge


def main():
    """Build and import a small exchange-production economy."""
    print("=" * 70)
    print("Example 1: Minimal Import")
    print("=" * 70)

    model = SimpleModel("two_by_two")
    px = model.add_commodity("PX")
    py = model.add_commodity("PY")
    pl = model.add_commodity("PL")
    pk = model.add_commodity("PK")
    x = model.add_sector("X")
    y = model.add_sector("Y")
    ra = model.add_consumer("RA")

    model.add_production(x, outputs={px: 100.0}, inputs={pl: 25.0, pk: 75.0})
    model.add_production(y, outputs={py: 100.0}, inputs={pl: 75.0, pk: 25.0})
    model.add_demand(ra, final_demand={px: 100.0, py: 100.0}, endowments={pl: 100.0, pk: 100.0})
    print(f"\n{model}")

    spec = import_mpsge(model, name="TwoByTwo")
    print(f"\n{spec}")

    print("\n" + "-" * 70)
    print("Output coefficients")
    print("-" * 70)
    print(spec.get_block("activity").a_out.to_frame())

    print("\n" + "-" * 70)
    print("Demand shares")
    print("-" * 70)
    print(spec.get_block("consumers").alpha.to_frame())

    print(f"\nActivity outputs: {spec.mappings.activity_to_output}")
    print(f"Numeraire: {spec.closure.fixed}")

    out = spec.to_json(Path("output") / "two_by_two_runspec.json")
    print(f"\nRunSpec written to {out}")


if __name__ == "__main__":
    main()
