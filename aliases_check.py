#!/usr/bin/env python3
"""
aliases_check.py

Script to verify that every alias target resolves to a record in the drug database.
"""
import sys
from medresolve.analysis.resolver import DrugResolver
from medresolve.config import DRUG_DATABASE
from medresolve.data.store import DrugStore

source = sys.argv[1] if len(sys.argv) > 1 else DRUG_DATABASE
resolver = DrugResolver(DrugStore(source))

# Check each canonical term once
resolved = []
unresolved = []
for canonical in sorted(set(resolver.aliases.values())):
    if resolver.find_exact(canonical) or resolver.search(canonical, limit=1):
        resolved.append(canonical)
    else:
        unresolved.append(canonical)
# Summarize
print(f"Total alias entries: {len(resolver.aliases)}")
print(f"Canonical terms found in database: {len(resolved)}")
print(f"Canonical terms missing from database: {len(unresolved)}")

print("\nMissing:")
for term in unresolved:
    print(term)
