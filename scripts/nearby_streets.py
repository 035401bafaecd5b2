# scripts/nearby_streets.py
# 使い方: python scripts/nearby_streets.py 37.8667 23.7667
import sys

from binsurvey.services.streets.gazetteer import get_municipality
from binsurvey.services.streets.proximity import Location, nearby_with_distance

m = get_municipality(sys.argv[3] if len(sys.argv) > 3 else "Glyfada")
fix = Location(float(sys.argv[1]), float(sys.argv[2]))
for street, km in nearby_with_distance(fix, m.streets, Location(m.latitude, m.longitude)):
    print(f"{km:6.3f} km  {street}")
