from dinedash.models.tenant import Tenant, SubscriptionPlan
from dinedash.models.brand_settings import BrandSettings
from dinedash.models.tax_setting import TaxSetting
from dinedash.models.staff import Staff, StaffRole
from dinedash.models.platform_admin import PlatformAdmin, PlatformRole
from dinedash.models.menu_category import MenuCategory
from dinedash.models.menu_item import MenuItem
from dinedash.models.customization import Customization
from dinedash.models.table import Table
from dinedash.models.customer import Customer
from dinedash.models.order import Order, OrderStatus, PaymentStatus
from dinedash.models.order_line_item import OrderLineItem
from dinedash.models.invoice import Invoice, InvoiceSequence
from dinedash.models.otp import OTP
from dinedash.models.waiter_call import WaiterCall, WaiterCallStatus
