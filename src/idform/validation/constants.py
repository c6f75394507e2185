"""
Constants for field validation.

All patterns and messages used by the field validators live here.
Patterns are matched with ``fullmatch``, so they carry no anchors.
"""

import re

# Letters only, ASCII
LETTERS_PATTERN = re.compile(r"[a-zA-Z]+")

# CURP: letter, vowel, 2 letters, birth date, sex marker, state,
# 3 internal consonants, homonymy disambiguator, check digit.
# Matched against the uppercased value.
CURP_PATTERN = re.compile(r"[A-Z][AEIOU][A-Z]{2}[0-9]{6}[HM][A-Z]{2}[B-DF-HJ-NP-TV-Z]{3}[A-Z0-9][0-9]")

# RFC: 3 (company) or 4 (person) letters, date, optional homoclave.
# Matched against the uppercased value.
RFC_PATTERN = re.compile(r"[A-ZÑ&]{3,4}[0-9]{6}(?:[A-Z0-9]{3})?")

# Zip code and external number
SMALL_NUMBER_PATTERN = re.compile(r"[0-9]{1,5}")

# Internal number
SHORT_ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]{1,10}")

ONLY_LETTERS_MESSAGE = "Only letters are allowed"
INVALID_CURP_MESSAGE = "Invalid CURP"
INVALID_RFC_MESSAGE = "Invalid RFC"
SMALL_NUMBER_MESSAGE = "Only numbers are allowed less than 5 digits"
SHORT_ALPHANUMERIC_MESSAGE = "Only numbers and letters are allowed less than 10 characters"
