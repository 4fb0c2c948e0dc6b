import uvicorn

if __name__ == "__main__":
    print("Starting Rental Backend...")
    uvicorn.run("rental.main:app", host="127.0.0.1", port=8000, reload=False)
