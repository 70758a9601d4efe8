"""
Basic usage examples for dynamic_property.
"""
import logging

from config_cascade import AppConfig
from dynamic_property import PropertyRegistry

logging.basicConfig(level=logging.INFO)

def example_basic_usage():
    print("--- Basic Usage ---")
    app = AppConfig(environ={})
    registry = PropertyRegistry(app)

    timeout = registry.get_property("http.timeout").as_integer(30)
    print(f"timeout (default): {timeout.get()}")

    timeout.subscribe(lambda value: print(f"timeout changed: {value}"))

    app.set_property("http.timeout", "45")
    registry.flush(1.0)
    print(f"timeout (runtime): {timeout.get()}")

    app.clear_property("http.timeout")
    registry.flush(1.0)
    registry.shutdown()

def example_lists():
    print("\n--- Lists ---")
    app = AppConfig(environ={})
    registry = PropertyRegistry(app)

    app.set_default("cors.origins", "https://a.example.com, https://b.example.com")
    origins = registry.get_property("cors.origins").as_list()
    print(f"origins: {origins.get()}")
    registry.shutdown()

def example_fallback_keys():
    print("\n--- Fallback Keys ---")
    app = AppConfig(environ={})
    registry = PropertyRegistry(app)

    app.set_default("http.timeout", "30")
    timeout = registry.get_property("billing.http.timeout").as_integer(10).or_else_key("http.timeout")
    print(f"billing timeout (shared): {timeout.get()}")

    app.set_property("billing.http.timeout", "90")
    print(f"billing timeout (own): {timeout.get()} from {timeout.source_key}")
    registry.shutdown()

if __name__ == "__main__":
    example_basic_usage()
    example_lists()
    example_fallback_keys()
