"""NovaTicket: a local support-ticket tracker."""
