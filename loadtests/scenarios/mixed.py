"""Mixed storefront workload scenario.

Combines shopper and back-office journeys with weights that model realistic
e-commerce traffic. This is the recommended scenario for load baseline
testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.admin import CatalogueMaintenanceJourney, FulfilmentJourney
from loadtests.scenarios.shopper import BrowseAndAbandonJourney, CheckoutJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent storefront activity.

    Weight distribution:

    Shoppers (85%):
    - Browse and abandon: most common session
    - Checkout: conversion path, with occasional cancellation

    Back office (15%):
    - Catalogue maintenance: keeps stock available
    - Fulfilment: drains pending orders to delivered

    Checkouts and restocks touch the same products, so this is also the
    scenario that surfaces version conflicts on hot products.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseAndAbandonJourney: 55,
        CheckoutJourney: 30,
        CatalogueMaintenanceJourney: 10,
        FulfilmentJourney: 5,
    }
