import os

# === Calendar ===
N_DAYS = 5
N_PERIODS_PER_DAY = 9
N_SLOTS = N_DAYS * N_PERIODS_PER_DAY
END_OF_DAY_SLOTS = tuple(d * N_PERIODS_PER_DAY + N_PERIODS_PER_DAY - 1 for d in range(N_DAYS))

# Runs of this many consecutive busy slots start costing penalty points
LONG_INTENSIVE_RUN = 3

# Marks an unassigned slot or room in a solution file
UNASSIGNED = -1

# === Input files ===
INSTANCE_SUFFIX = ".tim"
SOLUTION_SUFFIX = ".sln"

# === Defaults ===
PROFILE = os.getenv("TIMVALIDATE_PROFILE", "extended")
LOG_LEVEL = os.getenv("TIMVALIDATE_LOG_LEVEL", "WARNING")

# === Exit codes ===
EXIT_OK = 0
EXIT_USAGE = 2
EXIT_FILE_NOT_FOUND = 3
EXIT_MALFORMED_INSTANCE = 4
EXIT_MALFORMED_SOLUTION = 5
