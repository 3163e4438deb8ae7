# =============================================================================
# core/models.py  -  Data Models (the "nouns" Crunchbase hands back)
# =============================================================================
#
# These shapes document every record that flows back from the Crunchbase
# API.  They are TypedDicts, not dataclasses, on purpose: the server passes
# the API's JSON through VERBATIM.  A field the API omitted stays omitted;
# we never invent `None` or `""` placeholders for it.
#
# total=False marks the optional fields.  The required keys are declared on
# a base class so a reader can see at a glance what is always present.
#
# RELATIONSHIPS:
#   FundingRound and Acquisition point at companies only through small
#   identifier pairs (uuid + name), never an embedded Company.  A Person
#   points at their employer the same way.
# =============================================================================

from typing import Any, TypedDict


# -----------------------------------------------------------------------------
# Shared identifier shapes
# -----------------------------------------------------------------------------
class EntityRef(TypedDict):
    """A lightweight pointer to another entity."""

    uuid: str
    name: str


class LocationIdentifier(EntityRef):
    location_type: str                 # "city", "region", "country", ...


class Category(EntityRef):
    pass


class InvestorIdentifier(EntityRef):
    investor_type: str                 # "organization" or "person"


# -----------------------------------------------------------------------------
# Company
# -----------------------------------------------------------------------------
class _CompanyRequired(TypedDict):
    uuid: str                          # Stable across calls
    name: str
    short_description: str
    website_url: str


class Company(_CompanyRequired, total=False):
    """An organization profile."""

    linkedin_url: str
    twitter_url: str
    facebook_url: str
    logo_url: str
    location_identifiers: list[LocationIdentifier]
    categories: list[Category]
    founded_on: str                    # ISO date
    closed_on: str
    num_employees_min: int
    num_employees_max: int
    status: str                        # "active", "closed", "acquired", ...
    rank: int                          # Lower = more popular
    created_at: str
    updated_at: str


# -----------------------------------------------------------------------------
# FundingRound
# -----------------------------------------------------------------------------
class _FundingRoundRequired(TypedDict):
    uuid: str
    name: str
    announced_on: str
    investment_type: str               # "seed", "series_a", ...
    created_at: str
    updated_at: str


class FundingRound(_FundingRoundRequired, total=False):
    closed_on: str
    money_raised: float
    money_raised_currency_code: str
    target_money_raised: float
    target_money_raised_currency_code: str
    investor_identifiers: list[InvestorIdentifier]
    lead_investor_identifiers: list[InvestorIdentifier]


# -----------------------------------------------------------------------------
# Acquisition
# -----------------------------------------------------------------------------
class _AcquisitionRequired(TypedDict):
    uuid: str
    acquirer_identifier: EntityRef
    acquiree_identifier: EntityRef
    announced_on: str
    created_at: str
    updated_at: str


class Acquisition(_AcquisitionRequired, total=False):
    completed_on: str
    price: float
    price_currency_code: str
    acquisition_type: str
    acquisition_status: str
    acquisition_terms: str


# -----------------------------------------------------------------------------
# Person
# -----------------------------------------------------------------------------
class _PersonRequired(TypedDict):
    uuid: str
    first_name: str
    last_name: str
    name: str
    created_at: str
    updated_at: str


class Person(_PersonRequired, total=False):
    gender: str
    linkedin_url: str
    twitter_url: str
    facebook_url: str
    featured_job_organization_uuid: str
    featured_job_organization_name: str
    featured_job_title: str
    rank: int


# -----------------------------------------------------------------------------
# List envelope returned by every /searches/* and list endpoint
# -----------------------------------------------------------------------------
class ListResponse(TypedDict):
    data: list[Any]
    count: int
    total_count: int
