# Configuration du schéma IPFE

# Nombre de paires de clés (l) par défaut, comme le schéma d'origine
DEFAULT_VECTOR_LENGTH = 6

# Niveau de sécurité par défaut : groupe RFC 5114 de 2048 bits (~112 bits)
DEFAULT_SECURITY_LEVEL = 112

# Démonstration : l = 2, poids y_i dans [1, 7], messages x_i dans [1, 72]
DEMO_NUM_CLIENTS = 2
DEMO_WEIGHT_BOUND = 7
DEMO_MESSAGE_BOUND = 72

# Journalisation
LOGGER_NAME = "ipfe"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
