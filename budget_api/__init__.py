"""HTTP surface for the budget tracker."""
