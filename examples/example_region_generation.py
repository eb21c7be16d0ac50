"""
Example demonstrating region generation for a small theater.

Builds a throwaway theater directory with two regions, generates the
startup assets, advances to stage 2, books an aircraft departure against a
base inventory and saves a region map.
"""
import json
import os
import sys
import tempfile

# Add pytheater to path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pytheater import Theater, TheaterSettings, save_region_map


def write_json(path, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def build_theater(root):
    write_json(os.path.join(root, "kutaisi", "region.def"), {
        "name": "Kutaisi",
        "priority": 10,
        "limits": {"sam": {"min": 1, "max": 2}},
        "border": [[0, 0], [60000, 0], [60000, 40000], [30000, 60000], [0, 40000]],
    })
    for i, pos in enumerate([(12000, 8000), (40000, 15000), (25000, 30000)]):
        write_json(os.path.join(root, "kutaisi", "sams", f"sa6-{i}.dct"), {
            "objtype": "sam", "theater": "Caucasus", "coalition": "red", "location": list(pos),
        })
    for name in ("ewr-east", "ewr-west"):
        write_json(os.path.join(root, "kutaisi", "ewr", f"{name}.dct"), {
            "objtype": "ewr", "theater": "Caucasus", "coalition": "red",
            "exclusion": "kutaisi-ewr", "location": [30000 if name == "ewr-east" else 10000, 20000],
        })
    write_json(os.path.join(root, "kutaisi", "sams", "sa10.dct"), {
        "objtype": "sam", "theater": "Caucasus", "coalition": "red", "stage": 2, "location": [30000, 45000],
    })

    write_json(os.path.join(root, "batumi", "region.def"), {
        "name": "Batumi",
        "priority": 20,
        "border": [[-50000, 0], [-5000, 0], [-5000, 40000], [-50000, 40000]],
    })
    write_json(os.path.join(root, "batumi", "airbase", "batumi.dct"), {
        "objtype": "airbase", "theater": "Caucasus", "coalition": "blue", "spawnalways": True,
        "location": [-30000, 20000],
    })

    write_json(os.path.join(root, "inventories", "inventory.json"), {
        "Batumi": {
            "airframes": {"F-16C_50": 6},
            "munitions": {"AIM-120C": 24},
            "other": {"Flight Crew": 10},
        },
    })
    write_json(os.path.join(root, "inventories", "crew.json"), {"F-16C_50": 1})


def main():
    print("=" * 60)
    print("REGION GENERATION EXAMPLE")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as root:
        build_theater(root)
        settings = TheaterSettings(theater="Caucasus", theater_path=root, seed=2024, verbose=True)
        theater = Theater.from_settings(settings)

        for region, assets in theater.generate().items():
            print(f"\n{region}:")
            for asset in assets:
                print(f"  - {asset.name} ({asset.objtype}) at {asset.get_location()}")

        print("\nAdvancing to stage 2...")
        for region, assets in theater.advance_stage(2).items():
            for asset in assets:
                print(f"  + {region}: {asset.name}")

        point = (20000, 10000)
        region = theater.region_at(point)
        print(f"\nPoint {point} is in region: {region.name if region else 'none'}")

        registry = theater.inventories
        request = registry.compute_withdrawal("F-16C_50", ammo={"AIM-120C": 4})
        result = registry.get("Batumi").checkout(request)
        print(f"\nBatumi departure approved: {result.all}")
        print(f"Batumi stock now: {registry.get('Batumi').stock['airframes']}")

    output = save_region_map(theater.regions, "region_map.png")
    print(f"\n✓ Region map saved to {output}")


if __name__ == "__main__":
    main()
