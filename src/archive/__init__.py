"""Apache Spark archive resolution, verification and installation.

This package handles:
1. Listing published versions and binary variants from the archive index
2. Selecting the archive matching the user's hadoop preferences
3. Fetching, normalizing and verifying SHA-512 checksums
4. Downloading, extracting and installing the archive
"""
