# MongoDB connection helpers (motor)
