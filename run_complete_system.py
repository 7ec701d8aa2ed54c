# run_complete_system.py
#!/usr/bin/env python3
"""
Smoke run + benchmark + significance test
"""

import os

# experiments write results/ relative to the working directory
os.chdir(os.path.join(os.path.dirname(os.path.abspath(__file__)), "ci"))

# 1. Single seeded run on the default items
print("Step 1: Smoke run")
os.system("python experiments/smoke_test_knapsack_pso.py")

# 2. Repeated trials for two swarm configurations
print("\nStep 2: Benchmark")
os.system("python experiments/run_knapsack_benchmark.py")

# 3. Paired comparison from the benchmark CSV
print("\nStep 3: Wilcoxon test")
os.system("python experiments/run_wilcoxon.py")

print("\nSystem execution completed!")
print("Results in ci/results/")
print("Plots in ci/results/figures/")
