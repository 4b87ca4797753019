from mangum import Mangum

from main import app

# Serverless handler for AWS Lambda / API Gateway
# lifespan stays on so each cold start builds and seeds its own radar store
handler = Mangum(app, lifespan="auto")
