"""Demo collection shown when nothing has been imported."""

from pipmaster.models.package import PackageCategory, PackageRecord

DEMO_PACKAGES: tuple[PackageRecord, ...] = (
    PackageRecord(
        name="numpy",
        version="1.26.4",
        size_mb=32.5,
        install_date="2023-11-15",
        category=PackageCategory.DATA_SCIENCE,
        description="Fundamental package for array computing in Python",
    ),
    PackageRecord(
        name="pandas",
        version="2.2.1",
        size_mb=45.2,
        install_date="2024-01-10",
        category=PackageCategory.DATA_SCIENCE,
        description="Powerful data structures for data analysis, time series, and statistics",
    ),
    PackageRecord(
        name="fastapi",
        version="0.109.2",
        size_mb=0.8,
        install_date="2024-02-01",
        category=PackageCategory.WEB,
        description="Modern, high-performance web framework for building APIs",
    ),
    PackageRecord(
        name="uvicorn",
        version="0.27.1",
        size_mb=2.1,
        install_date="2024-02-01",
        category=PackageCategory.WEB,
        description="The lightning-fast ASGI server.",
    ),
    PackageRecord(
        name="torch",
        version="2.2.0",
        size_mb=850.0,
        install_date="2023-12-20",
        category=PackageCategory.AI_ML,
        description="Tensors and Dynamic neural networks in Python with strong GPU acceleration",
    ),
    PackageRecord(
        name="scikit-learn",
        version="1.4.1",
        size_mb=28.4,
        install_date="2024-01-15",
        category=PackageCategory.AI_ML,
        description="A set of python modules for machine learning and data mining",
    ),
    PackageRecord(
        name="requests",
        version="2.31.0",
        size_mb=0.4,
        install_date="2023-10-05",
        category=PackageCategory.UTILITY,
        description="Python HTTP for Humans.",
    ),
    PackageRecord(
        name="black",
        version="24.2.0",
        size_mb=1.2,
        install_date="2024-02-10",
        category=PackageCategory.UTILITY,
        description="The uncompromising code formatter.",
    ),
)
