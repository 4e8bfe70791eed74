"""
Protocol Event Codes
====================

u16 codes identifying the events exchanged on the device bus.

The compiler seeds its constant table with these names so programs can
write ``match event BUTTON_PRESSED_EVENT_CODE;`` instead of a raw code.
``match tick`` compares against INTERNAL_SYSTEM_TICK_EVENT_CODE.
"""

BOOTLOADER_HELLO_EVENT_CODE = 0x0000
PROGRAMMER_HELLO_EVENT_CODE = 0x0001
PROGRAMMER_START_FIRMWARE_UPGRADE_EVENT_CODE = 0x0002
ACK_EVENT_CODE = 0x0003
DATA_EVENT_CODE = 0x0004
CONFIGURATOR_HELLO_EVENT_CODE = 0x0005
BCM_CHANGE_BRIGHTNESS_EVENT_CODE = 0x0006
BUTTON_PRESSED_EVENT_CODE = 0x0007
BUTTON_RELEASED_EVENT_CODE = 0x0008
PROGRAMMER_START_CONFIG_UPGRADE_EVENT_CODE = 0x0009
INTERNAL_SYSTEM_TICK_EVENT_CODE = 0x000a
PROGRAMMER_SET_DEVICE_ADDRESS_EVENT_CODE = 0x000b
MESSAGE_EVENT_CODE = 0x000c
BCM_ANIMATE_BRIGHTNESS_EVENT_CODE = 0x000d
RELAY_SET_VALUE_EVENT_CODE = 0x000e


# Name -> code, in code order
EVENT_CODES: dict[str, int] = {
    "BOOTLOADER_HELLO_EVENT_CODE": BOOTLOADER_HELLO_EVENT_CODE,
    "PROGRAMMER_HELLO_EVENT_CODE": PROGRAMMER_HELLO_EVENT_CODE,
    "PROGRAMMER_START_FIRMWARE_UPGRADE_EVENT_CODE": PROGRAMMER_START_FIRMWARE_UPGRADE_EVENT_CODE,
    "ACK_EVENT_CODE": ACK_EVENT_CODE,
    "DATA_EVENT_CODE": DATA_EVENT_CODE,
    "CONFIGURATOR_HELLO_EVENT_CODE": CONFIGURATOR_HELLO_EVENT_CODE,
    "BCM_CHANGE_BRIGHTNESS_EVENT_CODE": BCM_CHANGE_BRIGHTNESS_EVENT_CODE,
    "BUTTON_PRESSED_EVENT_CODE": BUTTON_PRESSED_EVENT_CODE,
    "BUTTON_RELEASED_EVENT_CODE": BUTTON_RELEASED_EVENT_CODE,
    "PROGRAMMER_START_CONFIG_UPGRADE_EVENT_CODE": PROGRAMMER_START_CONFIG_UPGRADE_EVENT_CODE,
    "INTERNAL_SYSTEM_TICK_EVENT_CODE": INTERNAL_SYSTEM_TICK_EVENT_CODE,
    "PROGRAMMER_SET_DEVICE_ADDRESS_EVENT_CODE": PROGRAMMER_SET_DEVICE_ADDRESS_EVENT_CODE,
    "MESSAGE_EVENT_CODE": MESSAGE_EVENT_CODE,
    "BCM_ANIMATE_BRIGHTNESS_EVENT_CODE": BCM_ANIMATE_BRIGHTNESS_EVENT_CODE,
    "RELAY_SET_VALUE_EVENT_CODE": RELAY_SET_VALUE_EVENT_CODE,
}
