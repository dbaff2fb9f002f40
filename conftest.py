def pytest_configure(config):
    config.addinivalue_line(
        "markers", "property: property-based tests driven by hypothesis"
    )
