from app.domain.entities.catalog import CatalogEntry, Store

STORES: dict[str, Store] = {
    "ratna snack": Store(
        name="Ratna Snack",
        phone="6281234567890",
        bank="BRI 1234-5678-90",
        products=(
            CatalogEntry(name="Keripik Pisang Manis", price=15000, stock=48),
            CatalogEntry(name="Gula Aren Asli", price=18000, stock=30),
        ),
    ),
    "dapur asep": Store(
        name="Dapur Asep",
        phone="6281234567891",
        bank="BCA 0987-6543-21",
        products=(
            CatalogEntry(name="Abon Sapi Original", price=35000, stock=12),
            CatalogEntry(name="Sambal Terasi Botol", price=12000, stock=30),
        ),
    ),
    "kopi curug": Store(
        name="Kopi Curug",
        phone="6281234567892",
        bank="MANDIRI 1111-2222-33",
        products=(
            CatalogEntry(name="Kopi Bubuk Robusta", price=25000, stock=20),
            CatalogEntry(name="Jahe Merah Instan", price=20000, stock=15),
        ),
    ),
    "kebun dewi": Store(
        name="Kebun Dewi",
        phone="6281234567893",
        bank="COD ONLY",
        products=(CatalogEntry(name="Bayam Segar Ikat", price=5000, stock=20),),
    ),
    "konveksi maju": Store(
        name="Konveksi Maju",
        phone="6281234567894",
        bank="BRI 5555-6666-77",
        products=(CatalogEntry(name="Kaos Sablon Desa", price=75000, stock=50),),
    ),
    "pandai besi jaya": Store(
        name="Pandai Besi Jaya",
        phone="6281234567895",
        bank="BCA 8888-9999-00",
        products=(CatalogEntry(name="Cangkul Baja", price=120000, stock=5),),
    ),
}
