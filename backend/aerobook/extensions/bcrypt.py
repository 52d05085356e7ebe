from flask_bcrypt import Bcrypt

# El costo se toma de BCRYPT_LOG_ROUNDS (config)
bcrypt = Bcrypt()
