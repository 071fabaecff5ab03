"""
Billing configuration settings.

Stripe credentials and the subscription plan catalogue.

Dependencies: pydantic, pydantic_settings
System role: Payment provider and plan configuration
"""

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlanPriceIds(BaseModel):
    """Stripe price ids for a plan per Stripe mode."""

    test: str | None = None
    production: str | None = None


class Plan(BaseModel):
    """Subscription plan definition."""

    name: str
    slug: str
    quota: int = Field(description="Maximum number of uploaded files")
    pages_per_pdf: int
    price_amount: int = Field(description="Monthly price in USD")
    price_ids: PlanPriceIds = Field(default_factory=PlanPriceIds)

    def price_id(self, production: bool) -> str | None:
        """Return the price id for the active Stripe mode."""
        return self.price_ids.production if production else self.price_ids.test

    def has_price_id(self, price_id: str) -> bool:
        """Check whether a stored Stripe price id belongs to this plan."""
        return price_id in (self.price_ids.test, self.price_ids.production)


class BillingSettings(BaseSettings):
    """Stripe and plan settings."""

    model_config = SettingsConfigDict(
        env_prefix="BILLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    stripe_secret_key: str = Field(
        default="",
        validation_alias=AliasChoices("BILLING_STRIPE_SECRET_KEY", "STRIPE_SECRET_KEY"),
        description="Stripe secret API key",
    )
    stripe_api_version: str | None = Field(
        default=None,
        description="Pinned Stripe API version (account default when unset)",
    )
    pro_price_id_test: str | None = Field(
        default=None,
        description="Stripe test-mode price id for the Pro plan",
    )
    pro_price_id_production: str | None = Field(
        default=None,
        description="Stripe live-mode price id for the Pro plan",
    )
    billing_path: str = Field(
        default="/dashboard/billing",
        description="Web app path users return to from Stripe",
    )

    @property
    def plans(self) -> list[Plan]:
        """Plan catalogue, Free first."""
        return [
            Plan(
                name="Free",
                slug="free",
                quota=10,
                pages_per_pdf=5,
                price_amount=0,
            ),
            Plan(
                name="Pro",
                slug="pro",
                quota=50,
                pages_per_pdf=25,
                price_amount=14,
                price_ids=PlanPriceIds(
                    test=self.pro_price_id_test,
                    production=self.pro_price_id_production,
                ),
            ),
        ]

    def get_plan(self, name: str) -> Plan | None:
        """Find a plan by display name."""
        return next((plan for plan in self.plans if plan.name == name), None)
