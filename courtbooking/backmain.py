from fastapi import FastAPI
from courtbooking.routers import rou_booking
from courtbooking.configuration.monitor import instrument_fastapi

app = FastAPI(
    title="Court Booking API",
    description="Availability, pricing and booking of courts, coaches and equipment",
    version="1.0.0"
)

app.include_router(rou_booking.router)

@app.get("/health")
def health():
    return {"status": "ok"}

# Instrument app with Azure Monitor
instrument_fastapi(app)

if __name__ == '__main__':
    import uvicorn
    uvicorn.run(app, host='0.0.0.0', port=8000)
