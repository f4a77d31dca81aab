"""Shared pytest fixtures for LiteSpec tests."""

from pathlib import Path

import pytest

PROSPECT_DSL = """
// Insurance prospect
def Quote object {
  insurance_type: string @required @enum(auto,motorcycle) @default(auto)
}

def Vehicle object {
  make: string @required
  year: integer @minimum(1900)
}

model Prospect object {
  first_name: string @required @minLength(2) @ui(wc-input,text,General,1)
  email: string @email
  quote: object @ref(Quote) @required
  household_vehicles: array(@ref(Vehicle)) @uniqueItems
  has_prior_coverage: boolean @default(false)
  prior_coverage_company: string

  @if(has_prior_coverage: @const(true), @required(prior_coverage_company))
  @if(quote.insurance_type: @enum(auto,motorcycle), @minItems(household_vehicles,1))
  @sort(first_name,asc)
  @breadcrumb(first_name,Prospect)
  @can(view: "agent || admin", add: "agent", edit: "agent", delete: "admin")
}
"""


@pytest.fixture
def prospect_dsl() -> str:
    """Return a LiteSpec document exercising most constructs."""
    return PROSPECT_DSL


@pytest.fixture
def examples_dir() -> Path:
    """Return path to the bundled example specs."""
    return Path(__file__).parent.parent / "examples"
