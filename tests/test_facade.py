"""
Tests for the DataLayer facade: namespaced modules, log-and-suppress policy
and the process-wide instance.
"""

import logging
from unittest.mock import patch

import pytest

from datalayer import (
    DataLayer,
    NotInitializedError,
    StaticEnvironment,
    get_data_layer,
    reset_data_layer,
)

from conftest import make_cart_item, make_product


class TestEndToEnd:
    """Test a typical browsing session."""

    def test_home_then_product_view(self, data_layer, environment):
        """Site context goes out once and is not nulled afterwards."""
        data_layer.page.home()
        data_layer.pdp.view(make_product())

        queue = environment.queue
        assert len(queue) == 2

        assert queue[0]["event"] == "page_default"
        assert queue[0]["default"]["site"]["name"] == "s"
        assert queue[0]["default"]["page"]["type"] == "home"
        assert queue[0]["default"]["page"]["action"] == "view"

        product = queue[1]["products"][0]
        assert queue[1]["event"] == "product_view"
        assert product["brand"] == "nike"
        assert product["category"] == "run"
        assert product["discount"] == 20
        assert product["is_markdown"] is True
        assert "site" not in queue[1]["default"]

    def test_products_nulled_when_leaving_product_page(self, data_layer, environment):
        """Keys from the previous event that are not re-sent are pushed as null."""
        data_layer.pdp.view(make_product())
        data_layer.cart.add(make_cart_item())

        assert environment.queue[1]["products"] is None
        assert environment.queue[1]["cart_items"][0]["child_sku"] == "c1"

    def test_checkout_flow(self, data_layer):
        """Cart state accumulates across cart operations and is cleared by the order."""
        data_layer.cart.add(make_cart_item(qty=2))
        data_layer.cart.add(make_cart_item(child_sku="c2", sku_by_size="c2-9"))
        assert data_layer.cart.get_info()["cart_quantity"] == "3"

        checkout = data_layer.checkout.start(data_layer.cart.get_items(), {"cartId": "cart-1"})
        assert checkout["cart"]["cart_total"] == "240.00"

        order = data_layer.order.success({"orderId": "1001"}, data_layer.cart.get_items(), {"cartId": "cart-1"})
        assert order["order"]["orderId"] == "1001"
        assert data_layer.cart.get_items() == []


class TestSuppression:
    """Test that module failures are logged instead of raised."""

    def test_validation_error_logged(self, data_layer, environment, caplog):
        """Invalid input returns None and logs the validation messages."""
        with caplog.at_level(logging.ERROR, logger="datalayer.facade"):
            result = data_layer.pdp.view({"brand": "Nike"})

        assert result is None
        assert environment.queue == []
        assert "[unified-datalayer]" in caplog.text
        assert "ValidationError in pdp.view" in caplog.text
        assert "child_sku is required." in caplog.text

    @pytest.mark.parametrize("feature", [5, "waterproof"])
    def test_malformed_feature_is_contained(self, data_layer, environment, caplog, feature):
        """A non-list feature is reported as a validation error, not raised."""
        with caplog.at_level(logging.ERROR, logger="datalayer.facade"):
            assert data_layer.pdp.view(make_product(feature=feature)) is None

        assert environment.queue == []
        assert "feature must be a list." in caplog.text

    def test_unexpected_error_is_contained(self, data_layer, caplog):
        """Any other exception from a module is logged and suppressed."""
        with patch.object(data_layer.modules["page"], "home", side_effect=RuntimeError("boom")):
            with caplog.at_level(logging.ERROR, logger="datalayer.facade"):
                assert data_layer.page.home() is None

        assert "[unified-datalayer] Unexpected RuntimeError in page.home: boom" in caplog.text

    def test_skip_logged_as_warning(self, data_layer, caplog):
        """Removing an unknown SKU is a warning, not an error."""
        with caplog.at_level(logging.WARNING, logger="datalayer.facade"):
            assert data_layer.cart.remove("missing") is None

        records = [r for r in caplog.records if r.name == "datalayer.facade"]
        assert records[0].levelno == logging.WARNING
        assert "cart.remove skipped" in records[0].getMessage()

    def test_non_emitting_operations_pass_through(self, data_layer):
        """Accessors return their value unchanged."""
        assert data_layer.cart.get_items() == []
        assert data_layer.cart.get_info()["cart_total"] == "0.00"

    def test_not_initialized_propagates(self):
        """Emitting before init is a programming error and is raised."""
        data_layer = DataLayer(StaticEnvironment())
        with pytest.raises(NotInitializedError):
            data_layer.page.home()

    def test_not_initialized_leaves_cart_empty(self):
        """A cart add that cannot be sent does not change the cart."""
        data_layer = DataLayer(StaticEnvironment())
        with pytest.raises(NotInitializedError):
            data_layer.cart.add(make_cart_item(qty=2))

        assert data_layer.cart.get_items() == []
        assert data_layer.cart.get_info()["cart_quantity"] == "0"

    def test_operation_repr(self, data_layer):
        assert repr(data_layer.cart) == "SafeModule('cart')"
        assert data_layer.cart.add.__name__ == "add"


class TestFacadeOperations:
    """Test facade-level operations."""

    def test_push_custom_event(self, data_layer, environment):
        """Custom events go through the same nullification pipeline."""
        data_layer.push_event("search_results", {"search": {"term": "shoes"}})
        event = data_layer.push_event("page_default", {})

        assert environment.queue[0]["default"]["site"]["name"] == "s"
        assert event["search"] is None

    def test_clear_products(self, data_layer, environment):
        data_layer.clear_products()
        assert environment.queue == [{"products": None}]

    def test_reset_first_event_flag(self, data_layer, environment):
        """Site context is sent again after a reset."""
        data_layer.page.home()
        data_layer.reset_first_event_flag()
        data_layer.page.home()

        assert "site" in environment.queue[1]["default"]

    def test_add_nullified_properties(self, data_layer, environment):
        """Extra default properties are nulled once configured."""
        data_layer.add_nullified_properties("default", ["search"])
        data_layer.push_event("search", {"default": {"search": {"term": "x"}}})
        data_layer.page.home()

        assert environment.queue[1]["default"]["search"] is None

    def test_queue_and_context_properties(self, data_layer, environment):
        assert data_layer.queue is environment.queue
        assert data_layer.site_info.name == "s"
        assert data_layer.user_info.user_state == "guest"

    def test_headless(self, site_info):
        """Without an environment nothing is queued but events are still built."""
        data_layer = DataLayer()
        data_layer.init({"siteInfo": site_info})

        event = data_layer.page.home()

        assert event["event"] == "page_default"
        assert data_layer.queue == []
        assert data_layer.environment is None


class TestProcessInstance:
    """Test the process-wide DataLayer handle."""

    def setup_method(self):
        reset_data_layer()

    def teardown_method(self):
        reset_data_layer()

    def test_same_instance_until_reset(self):
        first = get_data_layer()
        assert get_data_layer() is first

        reset_data_layer()
        assert get_data_layer() is not first

    def test_environment_used_on_creation_only(self):
        environment = StaticEnvironment()
        data_layer = get_data_layer(environment)

        assert data_layer.environment is environment
        assert get_data_layer(StaticEnvironment()).environment is environment

    def test_default_is_headless(self):
        assert get_data_layer().environment is None
