# pcstore/domain/enums.py
from enum import Enum


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class OrderStatus(str, Enum):
    CART = "CART"
    PAID = "PAID"


class PaymentStatus(str, Enum):
    COMPLETED = "COMPLETED"


class ProductCategory(str, Enum):
    COMPUTERS = "COMPUTERS"
    COMPONENTS = "COMPONENTS"
    PERIPHERALS = "PERIPHERALS"
    STORAGE = "STORAGE"


class ProductType(str, Enum):
    # computers
    DESKTOP_PC = "DESKTOP_PC"
    LAPTOP = "LAPTOP"
    ALL_IN_ONE = "ALL_IN_ONE"
    SERVER = "SERVER"
    # components
    PROCESSOR = "PROCESSOR"
    GRAPHICS_CARD = "GRAPHICS_CARD"
    RAM = "RAM"
    MOTHERBOARD = "MOTHERBOARD"
    POWER_SUPPLY = "POWER_SUPPLY"
    HEATSINK = "HEATSINK"
    FAN = "FAN"
    CASE = "CASE"
    # peripherals
    MONITOR = "MONITOR"
    KEYBOARD = "KEYBOARD"
    MOUSE = "MOUSE"
    PRINTER = "PRINTER"
    SPEAKERS = "SPEAKERS"
    MICROPHONE = "MICROPHONE"
    WEBCAM = "WEBCAM"
    HEADPHONES = "HEADPHONES"
    # storage
    HARD_DRIVE = "HARD_DRIVE"
    SSD = "SSD"
    USB_DRIVE = "USB_DRIVE"
    SD_CARD = "SD_CARD"
