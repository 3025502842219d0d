# Author      : Tyson Limato
# Date        : 2025-7-7
# File Name   : example_data_generator.py
import argparse
import csv
import random


def generate_vector_data(n=1000, filename="vectors.csv", seed=None):
    """
    Generate a pair of example vectors for `vecsum.py --csv`.

    Writes one row per element with columns "x" and "y". Pick n as a multiple
    of the number of MPI processes you plan to run with.
    """
    rng = random.Random(seed)
    rows = [(round(rng.uniform(-100.0, 100.0), 4), round(rng.uniform(-100.0, 100.0), 4))
            for _ in range(n)]

    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow(['x', 'y'])
        writer.writerows(rows)

    print(f"Vectors of order {n} saved as '{filename}'")
    return rows


# Run the function
if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument('-n', type=int, default=1000)
    parser.add_argument('--out', type=str, default="vectors.csv")
    parser.add_argument('--seed', type=int, default=None)
    args = parser.parse_args()
    generate_vector_data(args.n, args.out, args.seed)
