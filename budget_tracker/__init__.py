"""Console surface for the budget tracker."""
