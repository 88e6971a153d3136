# catalog_service.py
from typing import List, Optional

from sports_store.models.catalog import ProductCategory, SportType, ProductType

UNKNOWN_NAME = "Không xác định"

# Step 1: what kind of product
PRODUCT_CATEGORIES = (
    ProductCategory("ao", "Áo", "Áo thể thao các loại", "👕"),
    ProductCategory("quan", "Quần", "Quần thể thao các loại", "👖"),
    ProductCategory("giay", "Giày", "Giày thể thao các loại", "👟"),
    ProductCategory("kinh", "Kính", "Kính thể thao, kính bơi, kính đạp xe", "🥽"),
    ProductCategory("dung-cu", "Dụng cụ thể thao", "Bóng, vợt, thảm, và các dụng cụ thể thao khác", "🏀"),
    ProductCategory("phu-kien", "Phụ kiện", "Mũ, găng tay, tất, túi, bình nước và phụ kiện khác", "🎒"),
)

# Step 2: which sport
SPORT_TYPES = (
    SportType("football", "Bóng đá", "Bóng đá", "⚽"),
    SportType("basketball", "Bóng rổ", "Bóng rổ", "🏀"),
    SportType("running", "Chạy bộ", "Chạy bộ", "🏃‍♂️"),
    SportType("gym", "Gym & Fitness", "Gym & Fitness", "💪"),
    SportType("tennis", "Tennis", "Tennis", "🎾"),
    SportType("badminton", "Cầu lông", "Cầu lông", "🏸"),
    SportType("swimming", "Bơi lội", "Bơi lội", "🏊‍♂️"),
    SportType("cycling", "Đạp xe", "Đạp xe", "🚴‍♂️"),
    SportType("yoga", "Yoga", "Yoga", "🧘‍♀️"),
    SportType("outdoor", "Thể thao ngoài trời", "Leo núi, cắm trại, v.v.", "🏔️"),
    SportType("other", "Khác", "Các môn thể thao khác", "🏅"),
)

# Category x sport combinations
PRODUCT_TYPES = (
    # Áo
    ProductType("ao-football", "Áo bóng đá", "Áo đấu, áo tập bóng đá", "⚽👕", "ao"),
    ProductType("ao-basketball", "Áo bóng rổ", "Áo đấu, áo tập bóng rổ", "🏀👕", "ao"),
    ProductType("ao-running", "Áo chạy bộ", "Áo thun chạy bộ", "🏃‍♂️👕", "ao"),
    ProductType("ao-gym", "Áo tập gym", "Áo tập gym", "💪👕", "ao"),
    ProductType("ao-tennis", "Áo tennis", "Áo polo tennis", "🎾👕", "ao"),
    ProductType("ao-badminton", "Áo cầu lông", "Áo cầu lông", "🏸👕", "ao"),
    ProductType("ao-swimming", "Đồ bơi", "Đồ bơi nam nữ", "🏊‍♂️👙", "ao"),
    ProductType("ao-cycling", "Áo đạp xe", "Áo đạp xe", "🚴‍♂️👕", "ao"),
    ProductType("ao-yoga", "Áo yoga", "Áo tập yoga", "🧘‍♀️👕", "ao"),
    ProductType("ao-outdoor", "Áo outdoor", "Áo thể thao ngoài trời", "🏔️👕", "ao"),
    # Quần
    ProductType("quan-football", "Quần bóng đá", "Quần đùi bóng đá", "⚽🩳", "quan"),
    ProductType("quan-basketball", "Quần bóng rổ", "Quần đùi bóng rổ", "🏀🩳", "quan"),
    ProductType("quan-running", "Quần chạy bộ", "Quần đùi, quần bó chạy bộ", "🏃‍♂️🩳", "quan"),
    ProductType("quan-gym", "Quần tập gym", "Quần đùi, quần bó tập gym", "💪🩳", "quan"),
    ProductType("quan-tennis", "Quần tennis", "Quần đùi tennis", "🎾🩳", "quan"),
    ProductType("quan-badminton", "Quần cầu lông", "Quần đùi cầu lông", "🏸🩳", "quan"),
    ProductType("quan-swimming", "Quần bơi", "Quần bơi nam nữ", "🏊‍♂️🩳", "quan"),
    ProductType("quan-cycling", "Quần đạp xe", "Quần đạp xe có đệm", "🚴‍♂️🩳", "quan"),
    ProductType("quan-yoga", "Quần yoga", "Quần bó yoga", "🧘‍♀️👖", "quan"),
    ProductType("quan-outdoor", "Quần outdoor", "Quần thể thao ngoài trời", "🏔️👖", "quan"),
    # Giày
    ProductType("giay-football", "Giày đá bóng", "Giày bóng đá sân cỏ, sân futsal", "⚽👟", "giay"),
    ProductType("giay-basketball", "Giày bóng rổ", "Giày bóng rổ chuyên nghiệp", "🏀👟", "giay"),
    ProductType("giay-running", "Giày chạy bộ", "Giày chạy bộ", "🏃‍♂️👟", "giay"),
    ProductType("giay-gym", "Giày tập gym", "Giày tập gym", "💪👟", "giay"),
    ProductType("giay-tennis", "Giày tennis", "Giày tennis", "🎾👟", "giay"),
    ProductType("giay-badminton", "Giày cầu lông", "Giày cầu lông", "🏸👟", "giay"),
    ProductType("giay-cycling", "Giày đạp xe", "Giày đạp xe", "🚴‍♂️👟", "giay"),
    ProductType("giay-outdoor", "Giày leo núi", "Giày leo núi, trekking", "🏔️👟", "giay"),
    # Kính
    ProductType("kinh-swimming", "Kính bơi", "Kính bơi chống nước", "🏊‍♂️🥽", "kinh"),
    ProductType("kinh-cycling", "Kính đạp xe", "Kính đạp xe chống nắng", "🚴‍♂️🥽", "kinh"),
    ProductType("kinh-outdoor", "Kính outdoor", "Kính thể thao ngoài trời", "🏔️🥽", "kinh"),
    ProductType("kinh-running", "Kính chạy bộ", "Kính chạy bộ chống nắng", "🏃‍♂️🥽", "kinh"),
    # Dụng cụ thể thao
    ProductType("dung-cu-football", "Bóng đá", "Quả bóng đá", "⚽", "dung-cu"),
    ProductType("dung-cu-basketball", "Bóng rổ", "Quả bóng rổ", "🏀", "dung-cu"),
    ProductType("dung-cu-tennis-racket", "Vợt tennis", "Vợt tennis", "🎾", "dung-cu"),
    ProductType("dung-cu-tennis-ball", "Bóng tennis", "Bóng tennis", "🎾", "dung-cu"),
    ProductType("dung-cu-badminton-racket", "Vợt cầu lông", "Vợt cầu lông", "🏸", "dung-cu"),
    ProductType("dung-cu-badminton-shuttlecock", "Cầu lông", "Quả cầu lông", "🏸", "dung-cu"),
    ProductType("dung-cu-yoga-mat", "Thảm yoga", "Thảm tập yoga", "🧘‍♀️", "dung-cu"),
    ProductType("dung-cu-yoga-blocks", "Gạch yoga", "Gạch hỗ trợ yoga", "🧘‍♀️🧱", "dung-cu"),
    ProductType("dung-cu-gym", "Dụng cụ gym", "Tạ, dây kháng lực, v.v.", "💪🏋️", "dung-cu"),
    # Phụ kiện
    ProductType("phu-kien-mu", "Mũ thể thao", "Mũ, nón thể thao", "🧢", "phu-kien"),
    ProductType("phu-kien-gang-tay", "Găng tay", "Găng tay thể thao", "🧤", "phu-kien"),
    ProductType("phu-kien-tat", "Tất thể thao", "Tất dài, tất ngắn", "🧦", "phu-kien"),
    ProductType("phu-kien-tui", "Túi thể thao", "Túi đựng đồ, ba lô", "🎒", "phu-kien"),
    ProductType("phu-kien-binh-nuoc", "Bình nước", "Bình nước thể thao", "💧", "phu-kien"),
    ProductType("phu-kien-dong-ho", "Đồng hồ thể thao", "Đồng hồ thông minh", "⌚", "phu-kien"),
    ProductType("phu-kien-khac", "Phụ kiện khác", "Băng tay, băng đầu, khăn, v.v.", "🎽", "phu-kien"),
)


class CatalogService:
    """Read-only lookups over the static catalog."""

    def get_categories(self) -> List[ProductCategory]:
        return list(PRODUCT_CATEGORIES)

    def get_category_by_id(self, category_id: str) -> Optional[ProductCategory]:
        return next((c for c in PRODUCT_CATEGORIES if c.id == category_id), None)

    def get_category_name(self, category_id: str) -> str:
        category = self.get_category_by_id(category_id)
        return category.name if category else UNKNOWN_NAME

    def get_sport_types(self) -> List[SportType]:
        return list(SPORT_TYPES)

    def get_sport_type_by_id(self, sport_id: str) -> Optional[SportType]:
        return next((s for s in SPORT_TYPES if s.id == sport_id), None)

    def get_sport_type_name(self, sport_id: str) -> str:
        sport = self.get_sport_type_by_id(sport_id)
        return sport.name if sport else UNKNOWN_NAME

    def get_all_product_types(self) -> List[ProductType]:
        return list(PRODUCT_TYPES)

    def get_product_type_by_id(self, type_id: str) -> Optional[ProductType]:
        return next((t for t in PRODUCT_TYPES if t.id == type_id), None)

    def get_product_type_name(self, type_id: str) -> str:
        product_type = self.get_product_type_by_id(type_id)
        return product_type.name if product_type else UNKNOWN_NAME

    def get_product_types_by_category(self, category_id: str) -> List[ProductType]:
        return [t for t in PRODUCT_TYPES if t.category == category_id]


catalog_service = CatalogService()
