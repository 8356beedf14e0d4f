from app.models.coupon import Coupon
