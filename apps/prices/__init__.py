"""
Prices App - Store Price Comparison

Users report what items cost at which store. Reports of the same item at
the same store within a rolling window fold into one observation, which is
verified once it has been reported often enough. On top of the ledger the
app answers two questions:

- where is this item cheapest right now?
- which few stores should I visit for this shopping list, and what should
  I buy where?

Architecture:
- Models: StoreItemKey, PriceObservation
- Services: price_ledger, price_query, coverage_analysis, store_selection,
  shopping_plan
- Views: thin HTTP handlers over the services
"""
