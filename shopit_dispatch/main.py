"""FastAPI main application cho ShopIt Dispatch"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import DispatchError
from .schemas.common import VehicleType, ShippingSize, VEHICLE_TYPES
from .schemas.orders import (
    CapacityCheckRequest, CapacityCheckResponse,
    AvailableOrdersRequest, AvailableOrdersResponse,
)
from .schemas.fees import DeliveryFeeRequest, DeliveryFeeResult
from .services.capacity import (
    VEHICLE_CAPACITIES,
    aggregate_demand,
    can_vehicle_handle_order,
    get_largest_shipping_size,
    get_minimum_vehicle_for_size,
    get_compatible_vehicles,
    get_compatible_shipping_sizes,
    get_vehicle_emoji,
)
from .services.order_queue import sort_orders_for_vehicle, build_order_views
from .services.delivery_fee import DeliveryFeeService
from .utils.time_utils import TimeUtils

# Setup logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Global services
delivery_fee_service: DeliveryFeeService = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""

    # Startup
    logger.info("Starting ShopIt Dispatch Service")

    global delivery_fee_service
    delivery_fee_service = DeliveryFeeService()

    try:
        await delivery_fee_service.__aenter__()
        logger.info("Delivery fee service initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}")

    yield

    # Shutdown
    logger.info("Shutting down services")
    try:
        if delivery_fee_service:
            await delivery_fee_service.__aexit__(None, None, None)
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


# Create FastAPI app
app = FastAPI(
    title="ShopIt Dispatch",
    description="Kiểm tra sức chở của courier và tính phí giao hàng",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DispatchError)
async def dispatch_error_handler(request: Request, exc: DispatchError):
    """Domain errors -> 400"""
    logger.warning(f"Rejected request {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "error_type": type(exc).__name__}
    )


def get_delivery_fee_service() -> DeliveryFeeService:
    """Dependency injection for delivery fee service"""
    if delivery_fee_service is None:
        raise HTTPException(status_code=503, detail="Delivery fee service not available")
    return delivery_fee_service


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "ShopIt Dispatch",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""

    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "services": {}
    }

    try:
        if delivery_fee_service and delivery_fee_service.redis_client:
            await delivery_fee_service.redis_client.ping()
            health_status["services"]["route_cache"] = "healthy"
        else:
            health_status["services"]["route_cache"] = "no_cache"
    except Exception as e:
        health_status["services"]["route_cache"] = f"unhealthy: {str(e)}"

    if delivery_fee_service and delivery_fee_service.is_configured():
        health_status["services"]["routing"] = "configured"
    else:
        health_status["services"]["routing"] = "fallback"

    return health_status


@app.get("/vehicles")
async def list_vehicles():
    """Danh sách loại xe kèm capacity"""
    return [
        {
            "vehicle_type": vehicle.value,
            "emoji": get_vehicle_emoji(vehicle),
            "capacities": {size.value: limit for size, limit in VEHICLE_CAPACITIES[vehicle].items()},
            "compatible_sizes": [size.value for size in get_compatible_shipping_sizes(vehicle)],
        }
        for vehicle in VEHICLE_TYPES
    ]


@app.get("/sizes/{shipping_size}/vehicles")
async def vehicles_for_size(shipping_size: ShippingSize):
    """Xe tối thiểu và các xe chở được 1 kích thước"""
    return {
        "shipping_size": shipping_size.value,
        "minimum_vehicle": get_minimum_vehicle_for_size(shipping_size).value,
        "compatible_vehicles": [v.value for v in get_compatible_vehicles(shipping_size)],
    }


@app.post("/capacity/check", response_model=CapacityCheckResponse)
async def check_capacity(request: CapacityCheckRequest) -> CapacityCheckResponse:
    """Kiểm tra xe của courier có chở được đơn không"""
    can_carry = can_vehicle_handle_order(request.vehicle_type, request.items)

    logger.info(
        f"Capacity check: {request.vehicle_type.value} with {len(request.items)} items -> {can_carry}"
    )

    return CapacityCheckResponse(
        vehicle_type=request.vehicle_type,
        can_carry=can_carry,
        demand=aggregate_demand(request.items),
        largest_shipping_size=get_largest_shipping_size(request.items)
    )


@app.post("/orders/available", response_model=AvailableOrdersResponse)
async def available_orders(request: AvailableOrdersRequest) -> AvailableOrdersResponse:
    """Sắp xếp đơn chờ giao cho courier theo deadline và loại xe"""
    orders = sort_orders_for_vehicle(request.orders, request.vehicle_type, request.limit)
    return AvailableOrdersResponse(
        vehicle_type=request.vehicle_type,
        orders=build_order_views(orders, request.vehicle_type)
    )


@app.post("/delivery/fee", response_model=DeliveryFeeResult)
async def delivery_fee(
    request: DeliveryFeeRequest,
    fee_service: DeliveryFeeService = Depends(get_delivery_fee_service)
) -> DeliveryFeeResult:
    """Tính phí giao hàng từ cửa hàng tới khách"""
    result = await fee_service.calculate_delivery_fee(
        request.origin, request.destination, request.shipping_size
    )

    if request.prep_time_min_days is not None or request.prep_time_max_days is not None:
        prep_min = request.prep_time_min_days or 0
        prep_max = request.prep_time_max_days if request.prep_time_max_days is not None else prep_min
        estimate = TimeUtils.get_delivery_time_estimate(result.duration_minutes, prep_min, prep_max)
        result.min_days = estimate["min_days"]
        result.max_days = estimate["max_days"]

    logger.info(
        f"Delivery fee: {result.fee} GEL ({result.duration_minutes} min, {request.shipping_size.value})"
    )
    return result
