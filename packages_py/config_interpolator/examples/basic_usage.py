"""
Basic usage examples for config_interpolator.
"""
from config_interpolator import Interpolator, MissingStrategy, CircularReferenceError, extract_placeholders

def example_basic_usage():
    print("--- Basic Usage ---")
    values = {"host": "db.internal", "port": 5432, "url": "postgres://${host}:${port}/app"}

    template = "Connecting to ${url}"
    print(f"Template: {template}")
    print(f"Result:   {Interpolator().resolve(template, values.get)}")

def example_defaults():
    print("\n--- Defaults ---")
    template = "Pool size: ${pool.size:10}, offset: ${offset:-1}"
    print(f"Template: {template}")
    print(f"Result:   {Interpolator().resolve(template, {}.get)}")

def example_missing():
    print("\n--- Missing Keys ---")
    template = "token=${api.token}"
    keep = Interpolator(missing=MissingStrategy.KEEP)
    print(f"KEEP:  {keep.resolve(template, {}.get)}")
    print(f"EMPTY: {keep.with_missing(MissingStrategy.EMPTY).resolve(template, {}.get)}")

def example_cycles():
    print("\n--- Cycles ---")
    values = {"a": "${b}", "b": "${a}"}
    try:
        Interpolator().resolve("${a}", values.get)
    except CircularReferenceError as e:
        print(f"Error: {e}")

def example_extract():
    print("\n--- Extract ---")
    for placeholder in extract_placeholders("${scheme:https}://${host}/$${literal}"):
        print(f"{placeholder['raw']}: name={placeholder['name']} default={placeholder['default']}")

if __name__ == "__main__":
    example_basic_usage()
    example_defaults()
    example_missing()
    example_cycles()
    example_extract()
