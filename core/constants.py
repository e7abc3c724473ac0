# constants.py
# Constantes de domínio do CRM (códigos, bairros, segmentos e chaves de armazenamento)

# Primeiro código atribuído a um cliente
INITIAL_CLIENT_CODE = 1000

# Chaves das coleções no armazenamento local
CLIENTS_KEY = 'lele_da_kuka_clients_v1'
USERS_KEY = 'lele_da_kuka_users_v1'

# Administrador padrão criado quando não há usuários
BOOTSTRAP_ADMIN_ID = 'admin-0'
BOOTSTRAP_ADMIN_USERNAME = 'admin'
BOOTSTRAP_ADMIN_PASSWORD = '123'

USER_ID_PREFIX = 'user-'

DEFAULT_CITY = 'Maceió'
DEFAULT_STATE = 'AL'

# Quantidade de bairros exibidos no ranking do painel
NEIGHBORHOOD_TOP_N = 8

NEIGHBORHOODS = [
    'Antares', 'Benedito Bentes', 'Centro', 'Cruz das Almas', 'Farol', 'Guaxuma', 'Ipioca',
    'Jacarecica', 'Jatiúca', 'Levada', 'Mangabeiras', 'Pajuçara', 'Ponta Verde', 'Serraria',
    'Tabuleiro do Martins',
]

CLIENT_SEGMENTS = [
    'Fast Food', 'Bar Noturno', 'Restaurante Executivo', 'Padaria', 'Conveniência', 'Delivery', 'Outros',
]
